from __future__ import annotations

"""Render a single DMN decision table as an XML string.

The document is assembled from text fragments rather than an element tree:
the cell contents are FEEL expressions whose quoting must survive exactly as
written, and every user-supplied string goes through :func:`escape_xml` once.
"""

from typing import Any, Iterable, List, Mapping, Sequence, Union
import logging
import re

from dmn_builder.core.models import ParamDef, RuleRow
from dmn_builder.core.utils import escape_xml, to_feel_string

logger = logging.getLogger(__name__)

__all__ = [
    "DECISION_ID",
    "construct_dmn_xml",
    "build_input_clauses",
    "build_output_clauses",
    "build_rules",
    "format_input_entry_text",
    "format_output_entry_text",
]

DECISION_ID = "dynamicDecision"
DMN_NAMESPACE = "http://www.omg.org/spec/DMN/20151101/dmn.xsd"
MODEL_NAMESPACE = "http://camunda.org/schema/1.0/dmn"

# Operators, brackets, list separators and range/function openers mark a cell
# as a FEEL expression rather than a plain string literal.
_FEEL_INDICATORS = re.compile(
    r"[<>(),\[\]?*/+\-]|^(?:not|date|time|duration)\(", re.IGNORECASE
)

# Whitespace removed around cell values: ECMAScript WhiteSpace and
# LineTerminator. Unlike str.strip(), keeps \x1c-\x1f and \x85, drops U+FEFF.
_TRIM_CHARS = "\t\n\v\f\r \xa0" + "".join(
    map(chr, [0x1680, *range(0x2000, 0x200B), 0x2028, 0x2029, 0x202F, 0x205F, 0x3000, 0xFEFF])
)

_DOCUMENT_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<definitions xmlns="{dmn_ns}"
             id="definitions_{decision_id}"
             name="Dynamic DMN"
             namespace="{model_ns}">
  <decision id="{decision_id}" name="Dynamic Decision Table">
    <decisionTable id="decisionTable_{decision_id}" hitPolicy="{hit_policy}">
      {inputs}
      {outputs}
      {rules}
    </decisionTable>
  </decision>
</definitions>"""

ParamLike = Union[ParamDef, Mapping[str, Any]]


# ---------------------------------------------------------------------------
# Cell classification
# ---------------------------------------------------------------------------


def _is_quoted(trimmed: str) -> bool:
    return (trimmed.startswith('"') and trimmed.endswith('"')) or (
        trimmed.startswith("'") and trimmed.endswith("'")
    )


def _format_value(value: Any, param: ParamDef) -> str:
    """Return escaped entry text for a non-empty *value* of column *param*."""
    string_value = to_feel_string(value)
    if param.type != "string":
        # Numbers, booleans and custom types are emitted as written
        return escape_xml(string_value)

    trimmed = string_value.strip(_TRIM_CHARS)
    if _is_quoted(trimmed):
        return escape_xml(string_value)
    if _FEEL_INDICATORS.search(trimmed):
        return escape_xml(string_value)
    return f'"{escape_xml(string_value)}"'


def format_input_entry_text(value: Any, param: ParamDef) -> str:
    """Text for an input cell; blank cells become the ``-`` wildcard."""
    if value is None or to_feel_string(value).strip(_TRIM_CHARS) == "":
        return "-"
    return _format_value(value, param)


def format_output_entry_text(value: Any, param: ParamDef) -> str:
    """Text for an output cell; missing values become the FEEL ``null``.

    Empty strings are not blanks here: a ``string`` column renders ``""``.
    """
    if value is None:
        return "null"
    return _format_value(value, param)


# ---------------------------------------------------------------------------
# Fragment builders
# ---------------------------------------------------------------------------


def build_input_clauses(params: Sequence[ParamDef]) -> str:
    fragments = []
    for index, param in enumerate(params, start=1):
        name = escape_xml(param.name)
        fragments.append(
            f'<input id="Input_{index}" label="{name}">\n'
            f'        <inputExpression id="InputExpression_{index}" '
            f'typeRef="feel:{escape_xml(param.type)}">\n'
            f"          <text>{name}</text>\n"
            f"        </inputExpression>\n"
            f"      </input>"
        )
    return "\n      ".join(fragments)


def build_output_clauses(params: Sequence[ParamDef]) -> str:
    fragments = []
    for index, param in enumerate(params, start=1):
        name = escape_xml(param.name)
        fragments.append(
            f'<output id="Output_{index}" label="{name}" name="{name}" '
            f'typeRef="feel:{escape_xml(param.type)}">\n'
            f"        <outputValues><text></text></outputValues>\n"
            f"      </output>"
        )
    return "\n      ".join(fragments)


def _build_rule(
    rule_index: int,
    row: RuleRow,
    inputs: Sequence[ParamDef],
    outputs: Sequence[ParamDef],
) -> str:
    entries: List[str] = []
    for index, param in enumerate(inputs, start=1):
        text = format_input_entry_text(row.get(param.name), param)
        entries.append(
            f'<inputEntry id="InputEntry_{rule_index}_{index}"><text>{text}</text></inputEntry>'
        )
    for index, param in enumerate(outputs, start=1):
        text = format_output_entry_text(row.get(param.name), param)
        entries.append(
            f'<outputEntry id="OutputEntry_{rule_index}_{index}"><text>{text}</text></outputEntry>'
        )

    body = "".join(f"\n        {entry}" for entry in entries)
    return f'<rule id="Rule_{rule_index}">{body}\n      </rule>'


def build_rules(
    rules_grid: Iterable[RuleRow],
    inputs: Sequence[ParamDef],
    outputs: Sequence[ParamDef],
) -> str:
    """Render every row as a ``rule`` element, numbered in row order."""
    return "\n      ".join(
        _build_rule(rule_index, row, inputs, outputs)
        for rule_index, row in enumerate(rules_grid, start=1)
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def construct_dmn_xml(
    rules_grid: Sequence[RuleRow],
    input_params: Sequence[ParamLike],
    output_params: Sequence[ParamLike],
    hit_policy: str,
) -> str:
    """Return a DMN document holding one decision table.

    Parameters
    ----------
    rules_grid
        Rule rows in order; each maps a parameter name to its cell value.
        Missing names are treated like ``None``.
    input_params, output_params
        Column definitions, either :class:`ParamDef` or ``{"name", "type"}``
        mappings. Their order fixes the ``Input_<n>`` / ``Output_<n>`` ids.
    hit_policy
        Copied (escaped) into ``hitPolicy``; not checked against the DMN list.

    The call is pure: identical arguments give identical strings, and nothing
    is validated. Duplicate names or odd values yield well-formed XML that a
    rules engine may still reject.
    """
    inputs = [ParamDef.coerce(p) for p in input_params]
    outputs = [ParamDef.coerce(p) for p in output_params]
    rows = list(rules_grid)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "DMN build: inputs=%d outputs=%d rules=%d hit_policy=%s",
            len(inputs), len(outputs), len(rows), hit_policy,
        )

    return _DOCUMENT_TEMPLATE.format(
        dmn_ns=DMN_NAMESPACE,
        model_ns=MODEL_NAMESPACE,
        decision_id=DECISION_ID,
        hit_policy=escape_xml(to_feel_string(hit_policy)),
        inputs=build_input_clauses(inputs),
        outputs=build_output_clauses(outputs),
        rules=build_rules(rows, inputs, outputs),
    )
