from __future__ import annotations

"""High-level orchestration services (definition loading, conversion)."""

from .conversion_service import DmnConversionService  # noqa: F401

__all__: list[str] = [
    "DmnConversionService",
]
