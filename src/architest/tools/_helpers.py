"""Helpers shared by the scan and graph tools."""

from __future__ import annotations

import asyncio
from pathlib import Path

from architest.config import is_path_allowed, load_allowed_roots
from architest.errors import ArchitestError, MalformedDocumentError, ScanError
from architest.models import ScanResult
from architest.scanner.orchestrator import scan


async def run_scan(path: str) -> ScanResult:
    """Check ``path`` against the allowed roots, then scan it off the event loop.

    Raises:
        ScanError: If ARCHITEST_ALLOWED_ROOTS is set and excludes ``path``.
        ArchitestError: Any fatal compose-level failure.
    """
    roots = load_allowed_roots()
    if not is_path_allowed(path, roots):
        raise ScanError(
            f"Cannot scan '{path}': outside the directories allowed by ARCHITEST_ALLOWED_ROOTS.",
            path=path,
        )
    return await asyncio.to_thread(scan, Path(path))


def error_payload(exc: ArchitestError) -> dict[str, object]:
    """Build the failure dict returned by tools for a fatal scan error."""
    payload: dict[str, object] = {
        "success": False,
        "error": str(exc),
        "kind": exc.kind.value,
    }
    if exc.path:
        payload["file_path"] = exc.path
    if isinstance(exc, MalformedDocumentError) and exc.line is not None:
        payload["line"] = exc.line
        payload["column"] = exc.column
    return payload
