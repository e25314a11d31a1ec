from __future__ import annotations

"""Exception classes for the builder's file-facing surfaces.

``construct_dmn_xml`` itself never raises: it coerces every value it is given.
These exceptions cover loading table definitions and writing documents, where
a missing file or an unparsable definition has to reach the caller.
"""

from typing import Optional


class DmnBuilderError(Exception):
    """Base exception for all builder errors.

    Carries the offending file path (when there is one) and the underlying
    exception so front-ends can report both.
    """

    def __init__(self, message: str, path: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.path = path
        self.cause = cause

    def __str__(self) -> str:
        if self.path:
            return f"[File: {self.path}] {super().__str__()}"
        return super().__str__()


class DefinitionLoadError(DmnBuilderError):
    """Raised when a decision table definition file cannot be read.

    This includes missing files, unsupported extensions, YAML/JSON syntax
    errors and documents whose sections have the wrong shape.
    """
    pass


class DmnDocumentError(DmnBuilderError):
    """Raised when a generated document is rejected before being saved."""
    pass
