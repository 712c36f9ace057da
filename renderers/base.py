"""Base classes for recommendation digest renderers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class BaseRenderer(ABC):
    """Shared interface for any digest renderer."""

    name: str = "base"

    @abstractmethod
    def render(self, bundle: Dict[str, Any], out_dir: str) -> List[str]:
        """Render the bundle into files under ``out_dir`` and return the written paths."""
