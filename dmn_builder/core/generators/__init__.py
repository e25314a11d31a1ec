from __future__ import annotations

"""Modules responsible for generating DMN XML documents."""

from .dmn_builder import construct_dmn_xml  # noqa: F401

__all__: list[str] = [
    "construct_dmn_xml",
]
