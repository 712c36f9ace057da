"""Shared helpers for labeling scoring pillars."""

from __future__ import annotations

import re
from typing import Dict, List

PILLAR_KEYS: List[str] = [
    "technical_setup",
    "ai_search_readiness",
    "trust_authority",
    "ai_readability",
    "content_structure",
    "voice_optimization",
    "content_freshness",
    "speed_ux",
]

PILLAR_DISPLAY_NAMES: Dict[str, str] = {
    "ai_readability": "AI Readability",
    "ai_search_readiness": "AI Search Readiness",
    "content_freshness": "Content Freshness",
    "content_structure": "Content Structure",
    "speed_ux": "Speed & UX",
    "technical_setup": "Technical Setup",
    "trust_authority": "Trust & Authority",
    "voice_optimization": "Voice Optimization",
}

PILLAR_HEADLINES: Dict[str, str] = {
    "ai_readability": "Content AI Can Use",
    "ai_search_readiness": "Be Found",
    "content_freshness": "Stay Current",
    "content_structure": "Content AI Can Use",
    "speed_ux": "Be Fast & Frictionless",
    "technical_setup": "Solid Foundation",
    "trust_authority": "Be Trusted",
    "voice_optimization": "Own the Conversation",
}

_SNAKE_PILLAR = re.compile(r"^[a-z_]+$")


def normalize_pillar_key(pillar: str) -> str:
    """'Trust & Authority' -> 'trust_authority'; snake_case input passes through."""
    text = (pillar or "").strip()
    if not text:
        return ""
    if _SNAKE_PILLAR.match(text):
        return text
    if " " not in text and re.search(r"[a-z][A-Z]", text):
        # camelCase pillar keys such as 'speedUX' or 'aiReadability'
        text = re.sub(r"(?<=[a-z])(?=[A-Z])", " ", text)
    cleaned = re.sub(r"[^a-z0-9\s]", "", text.lower())
    return re.sub(r"\s+", "_", cleaned.strip())


def is_pillar(key: str) -> bool:
    return normalize_pillar_key(key) in PILLAR_DISPLAY_NAMES


def pillar_display_name(key: str) -> str:
    normalized = normalize_pillar_key(key)
    if not normalized:
        return ""
    label = PILLAR_DISPLAY_NAMES.get(normalized)
    if label:
        return label
    return normalized.replace("_", " ").title()


def pillar_headline(key: str) -> str:
    return PILLAR_HEADLINES.get(normalize_pillar_key(key), "")


__all__ = [
    "PILLAR_KEYS",
    "PILLAR_DISPLAY_NAMES",
    "PILLAR_HEADLINES",
    "normalize_pillar_key",
    "is_pillar",
    "pillar_display_name",
    "pillar_headline",
]
