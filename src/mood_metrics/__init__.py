"""
mood-metrics - MOOD design metrics for TypeScript class hierarchies

Computes Method/Attribute Inheritance Factor, Method/Attribute Hiding
Factor and Polymorphism Factor, plus depth of inheritance and number of
children per class.
"""

__version__ = "0.1.0"

from .api import analyze, analyze_json
from .exceptions import ConfigurationError, MoodMetricsError, UnsupportedHierarchyError

__all__ = [
    "analyze",
    "analyze_json",
    "MoodMetricsError",
    "ConfigurationError",
    "UnsupportedHierarchyError",
]
