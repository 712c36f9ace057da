"""String-form conversion for subfactor keys."""

from __future__ import annotations

import re
from typing import Tuple

from pillars import is_pillar, normalize_pillar_key

_CAPITAL = re.compile(r"([A-Z])")
_MULTI_UNDERSCORE = re.compile(r"__+")
_SCORE_SUFFIX = re.compile(r"_score$")


def to_snake_case(value: str) -> str:
    """'altTextScore' -> 'alt_text_score'; 'alt-text' -> 'alt_text'."""
    if not value:
        return ""
    text = _CAPITAL.sub(r"_\1", value).lower()
    if text.startswith("_"):
        text = text[1:]
    text = text.replace("-", "_")
    return _MULTI_UNDERSCORE.sub("_", text)


def to_camel_case(value: str) -> str:
    if not value:
        return ""
    words = value.split("_")
    return words[0] + "".join(word[:1].upper() + word[1:] for word in words[1:])


def _pillar_part(category: str) -> str:
    # Display names and camelCase pillar keys ("Speed & UX", "speedUX")
    if is_pillar(category):
        return normalize_pillar_key(category)
    return to_snake_case(category)


def normalize_key(key: str) -> str:
    """Normalize a subfactor key.

    Dotted keys keep their shape with each side snake_cased. Bare keys are
    snake_cased and lose a trailing ``_score``.
    """
    if not key or not isinstance(key, str):
        return ""
    key = key.strip()
    if "." in key:
        category, _, subfactor = key.partition(".")
        return f"{_pillar_part(category)}.{to_snake_case(subfactor)}"
    return _SCORE_SUFFIX.sub("", to_snake_case(key))


def build_canonical_key(category: str, subfactor: str) -> str:
    return f"{_pillar_part(category)}.{to_snake_case(subfactor)}"


def split_key(key: str) -> Tuple[str, str]:
    """Return (pillar, subfactor); pillar is '' for bare keys."""
    if not key:
        return "", ""
    if "." in key:
        pillar, _, subfactor = key.partition(".")
        return pillar, subfactor
    return "", key


__all__ = [
    "to_snake_case",
    "to_camel_case",
    "normalize_key",
    "build_canonical_key",
    "split_key",
]
