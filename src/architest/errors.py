"""Exception hierarchy for architest.

All exceptions inherit from ArchitestError (single catch point).
Each carries an ErrorKind so callers can report failures without
matching on exception types.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    NOT_FOUND = "not_found"
    MALFORMED_DOCUMENT = "malformed_document"
    SCHEMA_VIOLATION = "schema_violation"
    NOT_AN_API_SPEC = "not_an_api_spec"
    SCAN_ERROR = "scan_error"


class ArchitestError(Exception):
    """Base exception for all architest errors."""

    kind: ErrorKind = ErrorKind.SCAN_ERROR

    def __init__(self, message: str, *, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class DocumentNotFoundError(ArchitestError):
    """A compose file or spec file does not exist."""

    kind = ErrorKind.NOT_FOUND


class MalformedDocumentError(ArchitestError):
    """The file is not valid YAML/JSON.

    ``line`` and ``column`` are 1-based and set when the underlying
    parser reported a position.
    """

    kind = ErrorKind.MALFORMED_DOCUMENT

    def __init__(
        self,
        message: str,
        *,
        path: str = "",
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        super().__init__(message, path=path)
        self.line = line
        self.column = column


class SchemaViolationError(ArchitestError):
    """The document parsed but does not have the required shape."""

    kind = ErrorKind.SCHEMA_VIOLATION


class NotAnAPISpecError(ArchitestError):
    """The document has no ``openapi`` or ``swagger`` marker field."""

    kind = ErrorKind.NOT_AN_API_SPEC


class ScanError(ArchitestError):
    """Error scanning a project directory."""
