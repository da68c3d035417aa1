"""Scan a project: compose file, spec discovery, spec parsing, association.

A broken compose file is fatal for the whole scan.  A broken spec file is
not: it is recorded as a SpecError and the scan continues with the specs
that did parse.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from architest.compose.parser import parse_project_compose
from architest.errors import ArchitestError
from architest.models import OpenAPIResult, ScanResult, SpecError
from architest.openapi.discovery import discover_scoped_specs, discover_specs
from architest.openapi.parser import parse_spec
from architest.scanner.associate import associate

logger = logging.getLogger(__name__)


def scan(project_path: Path | str) -> ScanResult:
    """Scan a project directory and return a complete ScanResult.

    Args:
        project_path: Directory holding the compose file.

    Returns:
        A ScanResult with the parsed compose file, every discovered spec
        path (deduplicated, first-seen order), the enriched services and
        the per-spec parse failures.

    Raises:
        ArchitestError: Any compose-level failure (not found, malformed,
            schema violation).  There is no partial result in that case.
    """
    root = Path(project_path)
    compose = parse_project_compose(root)

    discovered = _dedupe(
        [
            *discover_specs(root),
            *(
                path
                for service in compose.services
                for path in discover_scoped_specs(root, service.build)
            ),
        ]
    )

    specs, spec_errors = parse_specs(discovered)
    services = associate(compose.services, specs, root)

    logger.info(
        "Scanned %s: %d services, %d specs (%d failed)",
        root,
        len(services),
        len(discovered),
        len(spec_errors),
    )

    return ScanResult(
        project_path=str(project_path),
        compose=compose,
        discovered_specs=discovered,
        services=tuple(services),
        spec_errors=spec_errors,
    )


def parse_specs(
    paths: Iterable[str],
) -> tuple[list[OpenAPIResult], tuple[SpecError, ...]]:
    """Parse every path, splitting the outcomes into successes and failures."""
    parsed: list[OpenAPIResult] = []
    errors: list[SpecError] = []
    for path in paths:
        try:
            parsed.append(parse_spec(path))
        except ArchitestError as exc:
            logger.warning("Skipping spec %s: %s", path, exc)
            errors.append(SpecError(file_path=path, kind=exc.kind, message=str(exc)))
    return parsed, tuple(errors)


def _dedupe(paths: Iterable[str]) -> tuple[str, ...]:
    """Keep the first occurrence of each path, keyed by its resolved form."""
    seen: dict[str, str] = {}
    for path in paths:
        seen.setdefault(str(Path(path).resolve()), path)
    return tuple(seen.values())
