"""Projection of analysis results into the JSON report shape."""

import json
import math
from typing import Any

from .analyzer import AnalysisResult


def format_metrics(result: AnalysisResult) -> dict[str, Any]:
    """Build the report object.

    Shape::

        {
            "classes": [{"className", "numberOfChildren", "depthOfInheritance", "parentClass"?}],
            "mif", "aif", "mhf", "ahf", "pof": float,
            "maxNumberOfChildren": int,
            "maxDepthOfInheritance": int,
        }
    """
    classes = []
    for metrics in result.classes:
        entry: dict[str, Any] = {
            "className": metrics.class_name,
            "numberOfChildren": metrics.number_of_children,
            "depthOfInheritance": metrics.depth_of_inheritance,
        }
        if metrics.parent_class_name:
            entry["parentClass"] = metrics.parent_class_name
        classes.append(entry)

    report: dict[str, Any] = {"classes": classes}
    report.update(result.ratios.as_dict())
    report["maxNumberOfChildren"] = max(
        (m.number_of_children for m in result.classes), default=0
    )
    report["maxDepthOfInheritance"] = max(
        (m.depth_of_inheritance for m in result.classes), default=0
    )
    return report


def to_json(report: dict[str, Any], indent: int = 4) -> str:
    """Serialize a report; NaN and infinite ratios become ``null``."""
    cleaned = {
        key: (None if isinstance(value, float) and not math.isfinite(value) else value)
        for key, value in report.items()
    }
    return json.dumps(cleaned, indent=indent, allow_nan=False)
