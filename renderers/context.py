"""Helpers for building digest template context from rendered recommendations."""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime
from typing import Any, Dict, List, Mapping

from models import AUTOMATION_ORDER, TargetLevel
from pillars import pillar_display_name, pillar_headline
from recommendations.playbook import get_entry

CONTROL_CHAR_RE = re.compile(r"[\x00-\x09\x0B-\x1F\x7F]")

TARGET_LABELS = {
    TargetLevel.SITE.value: "Site-wide",
    TargetLevel.PAGE.value: "Page",
    TargetLevel.BOTH.value: "Site or page",
}

logger = logging.getLogger(__name__)


def _clean_text(value: Any) -> str:
    if value is None:
        return ""
    text = CONTROL_CHAR_RE.sub(" ", str(value))
    return re.sub(r"[ \t]+", " ", text).strip()


def _as_payload(rec: Any) -> Dict[str, Any]:
    if hasattr(rec, "model_dump"):
        return rec.model_dump(mode="json")
    return dict(rec)


def _asset_content(content: Any) -> str:
    if isinstance(content, str):
        return content.strip()
    return json.dumps(content, indent=2, ensure_ascii=False, default=str)


def _target_label(payload: Mapping[str, Any]) -> str:
    level = payload.get("target_level")
    label = TARGET_LABELS.get(level, "Site-wide")
    if level == TargetLevel.PAGE.value and payload.get("target_url"):
        return f"{label}: {payload['target_url']}"
    return label


def build_digest_item(rec: Any, rank: int) -> Dict[str, Any]:
    payload = _as_payload(rec)
    key = payload.get("subfactor_key") or ""
    entry = get_entry(key)
    pillar = payload.get("pillar") or key.split(".", 1)[0]
    return {
        "rank": rank,
        "subfactor_key": key,
        "gap": _clean_text(payload.get("gap")) or key,
        "pillar_name": pillar_display_name(pillar),
        "pillar_headline": pillar_headline(pillar),
        "priority": entry.priority.value if entry else "Unranked",
        "automation_level": payload.get("automation_level") or "manual",
        "evidence_quality": payload.get("evidence_quality") or "weak",
        "confidence_pct": int(round(float(payload.get("confidence") or 0.0) * 100)),
        "target_label": _target_label(payload),
        "finding": _clean_text(payload.get("finding")),
        "why_it_matters": _clean_text(payload.get("why_it_matters")),
        "recommendation": _clean_text(payload.get("recommendation")),
        "what_to_include": _clean_text(payload.get("what_to_include")),
        "how_to_implement": [_clean_text(step) for step in payload.get("how_to_implement") or [] if _clean_text(step)],
        "examples": [_clean_text(example) for example in payload.get("examples") or [] if _clean_text(example)],
        "assets": [
            {"asset_type": asset.get("asset_type"), "content": _asset_content(asset.get("content"))}
            for asset in payload.get("generated_assets") or []
        ],
        "evidence_summary": _clean_text(payload.get("evidence_summary")),
    }


def build_digest_context(bundle: Mapping[str, Any]) -> Dict[str, Any]:
    """Template context for a digest bundle.

    ``bundle`` carries ``recommendations`` (models or dicts) plus optional
    ``scan`` (``id``/``url``), ``title`` and ``generated_at``.
    """
    scan = bundle.get("scan") or {}
    recs = list(bundle.get("recommendations") or [])
    items: List[Dict[str, Any]] = [build_digest_item(rec, idx) for idx, rec in enumerate(recs, start=1)]

    counts: Dict[str, int] = {}
    for level in AUTOMATION_ORDER:
        total = sum(1 for item in items if item["automation_level"] == level)
        if total:
            counts[level] = total

    generated_at = bundle.get("generated_at") or datetime.now()
    if isinstance(generated_at, datetime):
        generated_at = generated_at.strftime("%b %d, %Y")

    context = {
        "title": _clean_text(bundle.get("title")) or "Recommendation digest",
        "scan_id": scan.get("id") or scan.get("scan_id") or "unknown",
        "scan_url": scan.get("url") or "",
        "generated_at": generated_at,
        "items": items,
        "automation_counts": counts,
    }
    logger.debug("Built digest context with %d items", len(items))
    return context


__all__ = ["build_digest_item", "build_digest_context"]
