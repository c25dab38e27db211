"""Hierarchy metrics engine: resolution, classification, aggregation, formatting."""

from .aggregator import MoodMetrics, MoodRatio, aggregate
from .analyzer import AnalysisResult, MoodAnalyzer
from .classifier import classify
from .formatter import format_metrics, to_json
from .models import ClassMetrics, ClassRegistry, PropertyBucket
from .resolver import HierarchyResolver

__all__ = [
    "AnalysisResult",
    "ClassMetrics",
    "ClassRegistry",
    "HierarchyResolver",
    "MoodAnalyzer",
    "MoodMetrics",
    "MoodRatio",
    "PropertyBucket",
    "aggregate",
    "classify",
    "format_metrics",
    "to_json",
]
