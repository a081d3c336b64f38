"""SDK – shared type aliases."""
from __future__ import annotations

Hydration = dict[str, str]
"""Original reference string → resolved plaintext."""

__all__ = ["Hydration"]
