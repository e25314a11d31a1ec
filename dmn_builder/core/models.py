from __future__ import annotations

"""Shared data structures used across the DMN builder core.

This module is intentionally free of I/O code so that the contained objects
can be reused in any context (unit-tests, CLI, services, etc.).
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Union

__all__ = [
    "CellValue",
    "RuleRow",
    "ParamDef",
    "DecisionTableDefinition",
    "HIT_POLICIES",
    "DEFAULT_HIT_POLICY",
]

CellValue = Optional[Union[str, int, float, Decimal, bool]]
RuleRow = Mapping[str, CellValue]

# Tokens defined by the DMN standard. Hit policies are passed through
# unchecked; this list only feeds help texts and warnings.
HIT_POLICIES: tuple[str, ...] = (
    "UNIQUE",
    "FIRST",
    "PRIORITY",
    "ANY",
    "COLLECT",
    "RULE ORDER",
    "OUTPUT ORDER",
)
DEFAULT_HIT_POLICY = "UNIQUE"


@dataclass(frozen=True)
class ParamDef:
    """A decision table column: the variable *name* and its FEEL *type* tag.

    ``type`` is usually ``"string"``, ``"number"`` or ``"boolean"``; only
    ``"string"`` changes how cell values are quoted.
    """

    name: str
    type: str = ""

    @classmethod
    def coerce(cls, param: Union["ParamDef", Mapping[str, Any]]) -> "ParamDef":
        """Return *param* as a :class:`ParamDef`.

        Accepts instances unchanged or ``{"name": ..., "type": ...}`` mappings.
        Missing keys become empty strings.
        """
        if isinstance(param, cls):
            return param
        name = param.get("name")
        type_ = param.get("type")
        return cls(
            name="" if name is None else str(name),
            type="" if type_ is None else str(type_),
        )


@dataclass
class DecisionTableDefinition:
    """Everything needed to generate one decision table.

    Attributes
    ----------
    rules
        Rule rows in document order, keyed by parameter name.
    inputs
        Input column definitions in column order.
    outputs
        Output column definitions in column order.
    hit_policy
        Copied verbatim into the ``hitPolicy`` attribute.
    source
        File the definition was read from, when loaded from disk.
    """

    rules: List[Dict[str, CellValue]] = field(default_factory=list)
    inputs: List[ParamDef] = field(default_factory=list)
    outputs: List[ParamDef] = field(default_factory=list)
    hit_policy: str = DEFAULT_HIT_POLICY
    source: Optional[str] = None
