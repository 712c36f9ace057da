"""Automation-level gating policies."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from config import AuditConfig
from models import AUTOMATION_ORDER, AutomationLevel, EvidenceAssessment, EvidenceQuality

_DOWNGRADE_STEPS: Dict[str, int] = {
    EvidenceQuality.STRONG.value: 0,
    EvidenceQuality.MEDIUM.value: 0,
    EvidenceQuality.WEAK.value: 1,
    EvidenceQuality.AMBIGUOUS.value: 2,
}


def _value(item: Union[str, AutomationLevel, EvidenceQuality, None]) -> str:
    if item is None:
        return ""
    return getattr(item, "value", item)


def adjust_automation_level(
    level: Union[str, AutomationLevel],
    quality: Union[str, EvidenceQuality],
) -> AutomationLevel:
    """Move ``level`` towards manual by 0/1/2 steps for strong-medium/weak/ambiguous.

    Never upgrades; unknown levels are treated as manual.
    """
    current = _value(level)
    if current not in AUTOMATION_ORDER:
        return AutomationLevel.MANUAL
    steps = _DOWNGRADE_STEPS.get(_value(quality), 0)
    index = min(AUTOMATION_ORDER.index(current) + steps, len(AUTOMATION_ORDER) - 1)
    return AutomationLevel(AUTOMATION_ORDER[index])


def should_skip_recommendation(
    assessment: EvidenceAssessment,
    gap: float,
    noise_gap: Optional[float] = None,
) -> bool:
    """Weak evidence on a small score gap is measurement noise."""
    limit = AuditConfig.NOISE_GAP if noise_gap is None else noise_gap
    return assessment.quality == EvidenceQuality.WEAK and 0 <= gap < limit


def verification_action_items(assessment: EvidenceAssessment, canonical_key: str = "") -> List[str]:
    items: List[str] = []
    if assessment.quality == EvidenceQuality.AMBIGUOUS:
        if "faq" in canonical_key.lower():
            items.append("Verify whether detected FAQs are real on-page Q&A (not navigation menu toggles).")
        else:
            items.append("Verify the detected issue before taking action - evidence is ambiguous.")
    elif assessment.quality == EvidenceQuality.WEAK:
        items.append("Collect/confirm missing inputs required to generate this asset.")

    missing: Any = (assessment.details or {}).get("min_evidence_missing") or []
    if missing:
        items.append(f"Missing evidence: check {len(missing)} required data points.")
    return items


__all__ = [
    "adjust_automation_level",
    "should_skip_recommendation",
    "verification_action_items",
]
