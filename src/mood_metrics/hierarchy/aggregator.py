"""Program-wide MOOD ratios.

Each ratio is an aggregate fraction: the sum of per-class numerators over
the sum of per-class denominators, so classes with more members weigh more.

    MIF = sum(inherited + own methods)          / sum(methods.length())
    AIF = sum(inherited + own attributes)       / sum(attributes.length())
    MHF = sum(private methods)                  / sum(methods.length())
    AHF = sum(private attributes)               / sum(attributes.length())
    POF = sum(inherited + overridden methods)   / sum(own methods * children)

A zero denominator gives NaN (or infinity for a non-zero numerator); that
is a legitimate result, not an error.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .models import ClassMetrics

METRIC_NAMES = ("mif", "aif", "mhf", "ahf", "pof")


@dataclass(frozen=True)
class MoodRatio:
    """Summed numerator and denominator of one metric."""

    numerator: int
    denominator: int

    @property
    def value(self) -> float:
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(np.float64(self.numerator) / np.float64(self.denominator))


@dataclass(frozen=True)
class MoodMetrics:
    """The five MOOD ratios of a program."""

    mif: MoodRatio
    aif: MoodRatio
    mhf: MoodRatio
    ahf: MoodRatio
    pof: MoodRatio

    def as_dict(self) -> dict[str, float]:
        return {name: getattr(self, name).value for name in METRIC_NAMES}


def class_terms(metrics: ClassMetrics) -> list[int]:
    """Numerator/denominator pairs of one class, in METRIC_NAMES order."""
    methods = metrics.methods
    attributes = metrics.attributes
    total_methods = methods.length()
    total_attributes = attributes.length()
    return [
        len(methods.inherited) + len(methods.own),
        total_methods,
        len(attributes.inherited) + len(attributes.own),
        total_attributes,
        methods.private_count,
        total_methods,
        attributes.private_count,
        total_attributes,
        len(methods.inherited) + len(methods.overridden),
        len(methods.own) * metrics.number_of_children,
    ]


def aggregate(classes: Sequence[ClassMetrics]) -> MoodMetrics:
    """Compute the MOOD ratios over every resolved class."""
    terms = np.array([class_terms(c) for c in classes], dtype=np.int64).reshape(-1, 10)
    totals = terms.sum(axis=0)
    pairs = totals.reshape(len(METRIC_NAMES), 2)
    ratios = {
        name: MoodRatio(int(numerator), int(denominator))
        for name, (numerator, denominator) in zip(METRIC_NAMES, pairs)
    }
    return MoodMetrics(**ratios)
