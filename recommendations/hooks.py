"""Generation hooks: caller-supplied async asset generators plus readiness checks."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from config import AuditConfig
from models import GeneratedAsset

from .evidence import get_path, unwrap_evidence
from .gating import analyze_faq_quality

logger = logging.getLogger(__name__)

GenerationHook = Callable[[Dict[str, Any], Dict[str, Any]], Awaitable[Any]]


def can_run_generation_hook(
    hook_key: str,
    evidence: Any,
    context: Optional[Mapping[str, Any]] = None,
) -> Tuple[bool, str]:
    """Return ``(can_generate, reason)`` for a hook given the available inputs.

    Unknown hooks are allowed; the hook itself decides whether it can produce
    something.
    """
    ev = unwrap_evidence(evidence)
    ctx = context or {}

    if hook_key == "technical_setup.organization_schema":
        has_name = bool(
            get_path(ev, "entities.entities.organizations.0.name")
            or get_path(ev, "content.headings.h1.0")
            or get_path(ev, "metadata.ogTitle")
            or ctx.get("company_name")
        )
        has_site_url = bool(get_path(ev, "url") or ctx.get("site_url"))
        if has_name and has_site_url:
            return True, "Sufficient organization identity signals"
        if has_name:
            return False, "Missing site URL for organization schema"
        return False, "Unable to reliably determine organization name"

    if hook_key == "technical_setup.open_graph_tags":
        has_title = bool(
            get_path(ev, "metadata.title")
            or get_path(ev, "metadata.ogTitle")
            or get_path(ev, "content.headings.h1.0")
            or ctx.get("company_name")
        )
        has_description = bool(
            get_path(ev, "metadata.description")
            or get_path(ev, "metadata.ogDescription")
            or get_path(ev, "content.paragraphs.0")
        )
        if has_title and has_description:
            return True, "Title and description available"
        if not has_title:
            return False, "No page title detected"
        return False, "No description content available"

    if hook_key == "ai_search_readiness.icp_faqs":
        faq_analysis = analyze_faq_quality(ev)
        if faq_analysis["is_suspicious"]:
            reason = faq_analysis["reasons"][0] if faq_analysis["reasons"] else "suspicious FAQ content detected"
            return False, f"FAQ generation blocked: {reason}"
        roles = ctx.get("icp_roles")
        if ctx.get("detected_industry") or ctx.get("industry") or (isinstance(roles, list) and roles):
            return True, "Industry context available for FAQ generation"
        return False, "Missing industry context or ICP roles for tailored FAQ generation"

    return True, "Unknown hook - proceeding with caution"


def _coerce_asset(result: Any) -> Optional[GeneratedAsset]:
    if result is None:
        return None
    if isinstance(result, GeneratedAsset):
        return result
    if isinstance(result, Mapping):
        return GeneratedAsset(**dict(result))
    raise TypeError(f"hook returned {type(result).__name__}, expected an asset mapping")


class HookRegistry:
    """Per-caller map of hook key -> async generator.

    Registries are created by the caller and passed into a render; nothing is
    registered globally.
    """

    def __init__(self, hooks: Optional[Mapping[str, GenerationHook]] = None, timeout: Optional[float] = None):
        self._hooks: Dict[str, GenerationHook] = dict(hooks or {})
        self.timeout = AuditConfig.HOOK_TIMEOUT_SECONDS if timeout is None else timeout

    def register(self, hook_key: str, hook: GenerationHook) -> None:
        if not hook_key:
            raise ValueError("hook_key cannot be empty")
        self._hooks[hook_key] = hook

    def get(self, hook_key: str) -> Optional[GenerationHook]:
        return self._hooks.get(hook_key)

    def has(self, hook_key: str) -> bool:
        return hook_key in self._hooks

    def keys(self) -> List[str]:
        return list(self._hooks.keys())

    async def execute(
        self,
        hook_key: str,
        evidence: Dict[str, Any],
        context: Dict[str, Any],
    ) -> Optional[GeneratedAsset]:
        """Run one hook; any failure, timeout or null result comes back as None."""
        hook = self._hooks.get(hook_key)
        if hook is None:
            logger.warning("Generation hook not registered: %s", hook_key)
            return None
        try:
            result = await asyncio.wait_for(hook(evidence, context), timeout=self.timeout)
            asset = _coerce_asset(result)
        except asyncio.TimeoutError:
            logger.warning("Generation hook %s timed out after %ss", hook_key, self.timeout)
            return None
        except (ValidationError, TypeError) as exc:
            logger.warning("Generation hook %s returned an invalid asset: %s", hook_key, exc)
            return None
        except Exception:
            logger.warning("Generation hook %s failed", hook_key, exc_info=True)
            return None
        if asset is None:
            logger.info("Generation hook %s returned no asset", hook_key)
        return asset


__all__ = [
    "GenerationHook",
    "HookRegistry",
    "can_run_generation_hook",
]
