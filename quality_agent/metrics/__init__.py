"""Quality metrics computed from findings."""
from __future__ import annotations

from .scoring import score

__all__ = ["score"]
