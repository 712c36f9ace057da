"""Markdown -> HTML digest renderer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

import markdown

from .base import BaseRenderer
from .context import build_digest_context
from .templates import render_digest_html, render_digest_markdown

logger = logging.getLogger(__name__)


class HTMLDigestRenderer(BaseRenderer):
    """Render the Markdown digest into a standalone HTML page."""

    name = "html_digest"
    filename = "recommendations_digest.html"

    def render(self, bundle: Dict[str, Any], out_dir: str) -> List[str]:
        base = Path(out_dir)
        base.mkdir(parents=True, exist_ok=True)
        context = build_digest_context(bundle)
        article_body = markdown.markdown(
            render_digest_markdown(context),
            extensions=["extra", "sane_lists"],
            output_format="html5",
        )
        html = render_digest_html({"title": context["title"], "article_body": article_body})
        output_path = base / self.filename
        output_path.write_text(html, encoding="utf-8")
        logger.info("Wrote HTML digest with %d recommendations to %s", len(context["items"]), output_path)
        return [str(output_path)]
