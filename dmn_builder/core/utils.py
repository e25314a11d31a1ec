from __future__ import annotations

"""Simple reusable helper functions.

The escaping and stringification helpers are side-effect-free and can be used
across all layers of the builder. The ``save_*`` wrappers are the only place
where generated documents touch the disk.
"""

from decimal import Decimal
from pathlib import Path
from typing import Any
import logging
import math
import re

from lxml import etree as ET

from dmn_builder.core.exceptions import DmnDocumentError

__all__ = [
    "escape_xml",
    "to_feel_string",
    "is_well_formed",
    "save_dmn_file",
]

logger = logging.getLogger(__name__)

_XML_ESCAPES = {
    "<": "&lt;",
    ">": "&gt;",
    "&": "&amp;",
    "'": "&apos;",
    '"': "&quot;",
}
_XML_RESERVED = re.compile(r"[<>&'\"]")

# repr() writes 1e-07 / 1e+22, ECMAScript writes 1e-7 / 1e+22
_EXPONENT = re.compile(r"e([+-])0*(\d+)$")


def escape_xml(unsafe: str) -> str:
    """Escape the five reserved XML characters in *unsafe*.

    The result is safe in both text and attribute-value position. No other
    character is touched: no numeric entities, no whitespace normalisation.
    Applying it twice double-escapes, so callers escape each value once.
    """
    return _XML_RESERVED.sub(lambda m: _XML_ESCAPES[m.group(0)], unsafe)


def _float_to_string(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    text = repr(value)
    if 1e-6 <= abs(value) < 1e21:
        # Positional notation, same shortest round-trip digits
        if text.endswith(".0"):
            text = text[:-2]
        return format(Decimal(text), "f")
    return _EXPONENT.sub(lambda m: f"e{m.group(1)}{m.group(2)}", text)


def to_feel_string(value: Any) -> str:
    """Return the textual form of a cell *value*.

    Conversion is explicit per value kind so the emitted numeric and boolean
    formats are stable:

    >>> to_feel_string(True)
    'true'
    >>> to_feel_string(3.0)
    '3'
    >>> to_feel_string(1e-7)
    '1e-7'

    Unknown types fall back to ``str()``; nothing is rejected.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _float_to_string(value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, str):
        return value
    return str(value)


# ---------------------------------------------------------------------------
# XML convenience wrappers
# ---------------------------------------------------------------------------


def is_well_formed(xml: str) -> bool:
    """Return *True* when *xml* parses as an XML document."""
    try:
        ET.fromstring(xml.encode("utf-8"))
    except ET.XMLSyntaxError:
        return False
    return True


def save_dmn_file(
    xml: str,
    path: str | Path,
    *,
    check_well_formed: bool = True,
    encoding: str = "utf-8",
) -> Path:
    """Write the generated document *xml* to *path*.

    Parameters
    ----------
    xml
        Complete DMN document as returned by ``construct_dmn_xml``.
    path
        Destination file path. Parent directories are created.
    check_well_formed
        When *True* (default) the string is parsed with ``lxml`` first and a
        :class:`DmnDocumentError` is raised instead of writing a broken file.
    encoding
        Text encoding used for the file.
    """
    path = Path(path)
    if check_well_formed:
        try:
            ET.fromstring(xml.encode("utf-8"))
        except ET.XMLSyntaxError as exc:
            logger.error("XML check failed path=%s: %s", path, exc)
            raise DmnDocumentError(
                "Generated document is not well-formed XML", path=str(path), cause=exc
            ) from exc

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding=encoding, newline="") as fh:
            fh.write(xml)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("I/O: wrote DMN path=%s chars=%d", path, len(xml))
    except Exception:
        # Caller context handles user feedback; file handler captures traceback
        logger.error("I/O FAIL: write DMN path=%s", path, exc_info=True)
        raise
    return path
