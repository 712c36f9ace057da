"""Playbook registry: schema, self-checks and O(1) lookup by canonical key."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from models import AutomationLevel, DetectionState, Priority
from pillars import PILLAR_KEYS, normalize_pillar_key, pillar_display_name

from .playbook_data import KEY_ALIASES, PLAYBOOK_DATA

_CANONICAL_KEY = re.compile(r"^[a-z][a-z0-9_]*\.[a-z][a-z0-9_]*$")
DEFAULT_VARIANT = "default"


class Rule(BaseModel):
    """Negative evidence signal.

    With a ``pattern`` the rule fires when the value at ``selector`` matches it
    (case-insensitive). Without one it fires when the value is present.
    """

    selector: str
    pattern: Optional[str] = None
    reason: str

    @field_validator("pattern")
    def validate_pattern(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            try:
                re.compile(v)
            except re.error as exc:
                raise ValueError(f"invalid pattern {v!r}: {exc}") from exc
        return v


class StateTemplate(BaseModel):
    """Template text keyed by detection state, with a ``default`` variant."""

    variants: Dict[DetectionState, str] = Field(default_factory=dict)
    default: Optional[str] = None

    @classmethod
    def coerce(cls, value: Any) -> "StateTemplate":
        if isinstance(value, StateTemplate):
            return value
        if value is None:
            return cls(default="")
        if isinstance(value, str):
            return cls(default=value)
        if isinstance(value, dict):
            variants: Dict[DetectionState, str] = {}
            default = None
            for name, text in value.items():
                if name == DEFAULT_VARIANT:
                    default = text
                else:
                    variants[DetectionState(name)] = text
            return cls(variants=variants, default=default)
        raise ValueError(f"Unsupported template value: {type(value).__name__}")

    def pick(self, state: Optional[DetectionState] = None) -> str:
        """Variant for ``state``, else ``default``, else the first declared variant."""
        if state is not None:
            key = DetectionState(state)
            if key in self.variants:
                return self.variants[key]
        if self.default is not None:
            return self.default
        for text in self.variants.values():
            return text
        return ""


class PlaybookEntry(BaseModel):
    canonical_key: str
    category_display_name: str
    gap_label: str
    priority: Priority
    effort: str
    impact: str
    automation_level: AutomationLevel
    generator_hook_key: Optional[str] = None
    evidence_selectors: List[str] = Field(default_factory=list)
    min_evidence: List[str] = Field(default_factory=list)
    disqualifiers: List[Rule] = Field(default_factory=list)
    ambiguity_rules: List[Rule] = Field(default_factory=list)
    finding_templates: StateTemplate
    why_it_matters_template: StateTemplate
    recommendation_template: StateTemplate
    what_to_include_template: StateTemplate
    action_items_template: List[str] = Field(default_factory=list)
    examples_template: List[str] = Field(default_factory=list)

    @field_validator(
        "finding_templates",
        "why_it_matters_template",
        "recommendation_template",
        "what_to_include_template",
        mode="before",
    )
    def coerce_template(cls, v: Any) -> StateTemplate:
        return StateTemplate.coerce(v)

    @field_validator("canonical_key")
    def validate_canonical_key(cls, v: str) -> str:
        if not _CANONICAL_KEY.match(v):
            raise ValueError(f"'{v}' is not a snake_case pillar.subfactor key")
        pillar = v.split(".", 1)[0]
        if pillar not in PILLAR_KEYS:
            raise ValueError(f"'{v}' uses unknown pillar '{pillar}'")
        return v

    @field_validator("gap_label", "effort", "impact")
    def validate_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("value cannot be blank")
        return v

    @model_validator(mode="after")
    def validate_generator_hook(self) -> "PlaybookEntry":
        if self.automation_level == AutomationLevel.GENERATE and not self.generator_hook_key:
            raise ValueError(f"{self.canonical_key}: generate-level entry requires generator_hook_key")
        return self

    @property
    def pillar(self) -> str:
        return self.canonical_key.split(".", 1)[0]

    @property
    def subfactor(self) -> str:
        return self.canonical_key.split(".", 1)[1]


def _build_registry(data: Dict[str, Dict[str, Any]]) -> Dict[str, PlaybookEntry]:
    registry: Dict[str, PlaybookEntry] = {}
    for key, spec in data.items():
        registry[key] = PlaybookEntry(
            canonical_key=key,
            category_display_name=pillar_display_name(key.split(".", 1)[0]),
            **spec,
        )
    return registry


def validate_registry(registry: Dict[str, PlaybookEntry], aliases: Dict[str, str]) -> List[str]:
    """Return registry self-check errors (empty when consistent)."""
    errors: List[str] = []
    for key, entry in registry.items():
        if entry.canonical_key != key:
            errors.append(f"{key}: canonical_key mismatch ({entry.canonical_key})")
        if not entry.evidence_selectors:
            errors.append(f"{key}: no evidence_selectors")
    for old, new in aliases.items():
        if new not in registry:
            errors.append(f"alias {old} -> {new}: target not in registry")
        if old in registry:
            errors.append(f"alias {old} shadows a registry key")
    return errors


REGISTRY: Dict[str, PlaybookEntry] = _build_registry(PLAYBOOK_DATA)
ALIASES: Dict[str, str] = dict(KEY_ALIASES)

_registry_errors = validate_registry(REGISTRY, ALIASES)
if _registry_errors:
    raise ValueError("Playbook registry self-check failed: " + "; ".join(_registry_errors))


def get_entry(canonical_key: str) -> Optional[PlaybookEntry]:
    return REGISTRY.get(canonical_key or "")


def has_entry(canonical_key: str) -> bool:
    return (canonical_key or "") in REGISTRY


def all_keys() -> List[str]:
    return list(REGISTRY.keys())


def entries_for_pillar(pillar: str) -> List[PlaybookEntry]:
    prefix = f"{normalize_pillar_key(pillar)}."
    return [entry for key, entry in REGISTRY.items() if key.startswith(prefix)]


__all__ = [
    "Rule",
    "StateTemplate",
    "PlaybookEntry",
    "REGISTRY",
    "ALIASES",
    "validate_registry",
    "get_entry",
    "has_entry",
    "all_keys",
    "entries_for_pillar",
]
