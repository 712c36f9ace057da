from typing import Any, Dict, List, Optional, Tuple

from config import AuditConfig
from models import AutomationLevel, EvidenceQuality, TargetLevel
from recommendations.placeholders import find_leaks
from recommendations.playbook import get_entry

# Raw evidence and generated asset payloads are not customer-facing copy.
NON_COPY_PREFIXES = ("evidence_json", "generated_assets")
REQUIRED_FIELDS = ("rec_key", "pillar", "subfactor_key", "gap", "automation_level", "evidence_quality", "target_level")


def _walk_strings(node: Any, path: str = "") -> List[Tuple[str, str]]:
    results: List[Tuple[str, str]] = []
    if isinstance(node, str):
        results.append((path, node))
    elif isinstance(node, list):
        for idx, value in enumerate(node):
            child_path = f"{path}[{idx}]" if path else f"[{idx}]"
            results.extend(_walk_strings(value, child_path))
    elif isinstance(node, dict):
        for key, value in node.items():
            child_path = f"{path}.{key}" if path else key
            results.extend(_walk_strings(value, child_path))
    return results


def _as_dict(rec: Any) -> Any:
    if hasattr(rec, "model_dump"):
        return rec.model_dump(mode="json")
    return rec


def _is_copy_field(path: str) -> bool:
    return not any(path == prefix or path.startswith(prefix + ".") or path.startswith(prefix + "[") for prefix in NON_COPY_PREFIXES)


def validate_no_placeholder_leaks(value: Any) -> List[str]:
    """Return ``path: leak`` entries for unresolved template tokens in copy fields."""

    leaks: List[str] = []
    for path, text in _walk_strings(_as_dict(value)):
        if not _is_copy_field(path):
            continue
        for leak in find_leaks(text):
            leaks.append(f"{path or '<root>'}: {leak}")
    return leaks


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


def lint_recommendation(rec: Any) -> List[str]:
    """Return a list of contract violations for one rendered recommendation."""

    payload = _as_dict(rec)
    if not isinstance(payload, dict):
        return ["Recommendation must be a dictionary or Recommendation model."]

    errors: List[str] = []
    for field in REQUIRED_FIELDS:
        value = payload.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            errors.append(f"{field} is missing.")

    subfactor_key = payload.get("subfactor_key") or ""
    rec_key = payload.get("rec_key") or ""
    if subfactor_key and rec_key and not rec_key.startswith(f"{subfactor_key}::"):
        errors.append(f"rec_key {rec_key!r} does not start with subfactor_key {subfactor_key!r}.")

    level = _enum_value(payload.get("automation_level"))
    if level is not None and level not in {item.value for item in AutomationLevel}:
        errors.append(f"automation_level must be one of generate/draft/guide/manual (got {level!r}).")

    quality = _enum_value(payload.get("evidence_quality"))
    if quality is not None and quality not in {item.value for item in EvidenceQuality}:
        errors.append(f"evidence_quality must be one of strong/medium/weak/ambiguous (got {quality!r}).")

    confidence = payload.get("confidence")
    if not isinstance(confidence, (int, float)) or isinstance(confidence, bool):
        errors.append("confidence must be a numeric value between 0.0 and 1.0.")
    elif not (0.0 <= float(confidence) <= 1.0):
        errors.append(f"confidence must be between 0.0 and 1.0 (got {confidence}).")

    target_level = _enum_value(payload.get("target_level"))
    target_url = payload.get("target_url")
    if target_level == TargetLevel.PAGE.value and not (isinstance(target_url, str) and target_url.strip()):
        errors.append("page-level recommendation must carry a non-empty target_url.")

    assets = payload.get("generated_assets") or []
    if level == AutomationLevel.GENERATE.value and not assets:
        errors.append("generate-level recommendation must carry at least one generated asset.")

    how_to_implement = payload.get("how_to_implement")
    if how_to_implement is not None and (
        not isinstance(how_to_implement, list) or not all(isinstance(step, str) for step in how_to_implement)
    ):
        errors.append("how_to_implement must be a list of strings.")

    for leak in validate_no_placeholder_leaks(payload):
        errors.append(f"placeholder leak in {leak}")

    return errors


def _rank_tuple(payload: Dict[str, Any]) -> Tuple[int, int, float]:
    entry = get_entry(payload.get("subfactor_key") or "")
    priority = AuditConfig.PRIORITY_WEIGHTS.get(entry.priority.value, 0) if entry else 0
    impact = AuditConfig.IMPACT_WEIGHTS.get(entry.impact, 0) if entry else 0
    score = (payload.get("evidence_json") or {}).get("score")
    return (-priority, -impact, float(score) if isinstance(score, (int, float)) else 0.0)


def lint_recommendation_set(recs: List[Any], max_count: Optional[int] = None) -> List[str]:
    """Return a list of contract violations for a rendered recommendation list."""

    errors: List[str] = []
    if not isinstance(recs, list):
        return ["Recommendations must be a list."]

    cap = AuditConfig.MAX_RECOMMENDATIONS if max_count is None else max_count
    if len(recs) > cap:
        errors.append(f"recommendations must contain ≤{cap} entries (got {len(recs)}).")

    payloads = [_as_dict(rec) for rec in recs]
    seen: Dict[str, int] = {}
    for idx, payload in enumerate(payloads):
        if not isinstance(payload, dict):
            errors.append(f"recommendations[{idx}] must be an object.")
            continue
        for error in lint_recommendation(payload):
            errors.append(f"recommendations[{idx}]: {error}")
        key = payload.get("subfactor_key")
        if key in seen:
            errors.append(f"recommendations[{idx}] duplicates subfactor_key {key!r} from recommendations[{seen[key]}].")
        elif key:
            seen[key] = idx

    ranked = [payload for payload in payloads if isinstance(payload, dict)]
    for idx in range(1, len(ranked)):
        if _rank_tuple(ranked[idx - 1]) > _rank_tuple(ranked[idx]):
            errors.append(
                f"{ranked[idx].get('subfactor_key')!r} outranks {ranked[idx - 1].get('subfactor_key')!r} "
                "by priority, impact or score but is listed after it."
            )

    return errors


__all__ = ["validate_no_placeholder_leaks", "lint_recommendation", "lint_recommendation_set"]
