"""Renderer registry."""

from __future__ import annotations

from typing import List

from .base import BaseRenderer


def _normalized(name: str) -> str:
    return (name or "").strip().lower()


def get_renderer(name: str) -> BaseRenderer:
    normalized = _normalized(name)
    if normalized in {"markdown_digest", "markdown", "md"}:
        from .markdown_digest import MarkdownDigestRenderer

        return MarkdownDigestRenderer()
    if normalized in {"html_digest", "html"}:
        from .html_digest import HTMLDigestRenderer

        return HTMLDigestRenderer()
    raise ValueError(f"Unknown renderer '{name}'")


def available_renderers() -> List[str]:
    return ["markdown_digest", "html_digest"]
