"""Deterministic confidence scoring for evidence assessments."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ConfidenceBreakdown:
    """Container for the transparent confidence math behind every assessment."""

    base: float
    coverage_adjustment: float = 0.0
    ceiling: float = 1.0
    context_adjustment: float = 0.0

    def clamp(self) -> "ConfidenceBreakdown":
        def _c(val: float) -> float:
            return max(0.0, min(1.0, float(val)))

        return ConfidenceBreakdown(
            base=_c(self.base),
            coverage_adjustment=max(-1.0, min(1.0, float(self.coverage_adjustment))),
            ceiling=_c(self.ceiling),
            context_adjustment=max(-1.0, min(1.0, float(self.context_adjustment))),
        )


def headline(breakdown: ConfidenceBreakdown) -> float:
    b = breakdown.clamp()
    # Ceiling applies to the evidence-derived part; context nudges after it.
    score = min(b.base + b.coverage_adjustment, b.ceiling) + b.context_adjustment
    return round(max(0.0, min(1.0, score)), 2)
