"""Recommendation digest Markdown renderer."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

from .base import BaseRenderer
from .context import build_digest_context
from .templates import render_digest_markdown


class MarkdownDigestRenderer(BaseRenderer):
    """Render the ranked recommendation list as a Markdown digest."""

    name = "markdown_digest"
    filename = "recommendations_digest.md"

    def render(self, bundle: Dict[str, Any], out_dir: str) -> List[str]:
        base = Path(out_dir)
        base.mkdir(parents=True, exist_ok=True)
        markdown = render_digest_markdown(build_digest_context(bundle))
        output_path = base / self.filename
        output_path.write_text(markdown.strip() + "\n", encoding="utf-8")
        return [str(output_path)]
