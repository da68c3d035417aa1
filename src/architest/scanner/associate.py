"""Associate parsed OpenAPI specs with compose services.

Matching strategies, in priority order:

1. **Build context co-location** -- a spec file found inside the service's
   build directory (first candidate in discovery order wins).
2. **Port matching** -- the port of a spec's base URL equals one of the
   service's container ports.

Greedy and first-match-wins: services are visited in input order and a
later service never takes back a spec claimed by an earlier one.  Each
service gets at most one spec and each spec is used at most once.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from urllib.parse import urlsplit

from architest.models import DockerService, EnrichedService, OpenAPIResult
from architest.openapi.discovery import discover_scoped_specs

logger = logging.getLogger(__name__)

_DEFAULT_PORTS: dict[str, int] = {"https": 443, "http": 80}


def associate(
    services: Sequence[DockerService],
    specs: Sequence[OpenAPIResult],
    project_path: Path | str,
) -> list[EnrichedService]:
    """Attach at most one spec to each service.

    Args:
        services: Compose services, in source order.
        specs: Successfully parsed specs, in discovery order.
        project_path: Project root; build contexts are resolved against it.

    Returns:
        One EnrichedService per input service, in the same order.  Services
        with no match carry ``openapi=None``, which is a normal outcome.
    """
    by_path: dict[str, OpenAPIResult] = {}
    for spec in specs:
        by_path.setdefault(_normalize(spec.file_path), spec)

    claimed: set[str] = set()
    matches: list[OpenAPIResult | None] = []

    # Pass 1: build context co-location
    for service in services:
        matched = None
        for candidate in discover_scoped_specs(project_path, service.build):
            key = _normalize(candidate)
            spec = by_path.get(key)
            if spec is not None and key not in claimed:
                matched = spec
                claimed.add(key)
                logger.debug("Attached %s to %s (build context)", spec.file_path, service.name)
                break
        matches.append(matched)

    # Pass 2: port matching for services still without a spec
    for index, service in enumerate(services):
        if matches[index] is not None or not service.ports:
            continue

        container_ports = {p.container for p in service.ports}
        for spec in specs:
            key = _normalize(spec.file_path)
            if key in claimed or spec.base_url is None:
                continue
            if port_from_url(spec.base_url) in container_ports:
                matches[index] = spec
                claimed.add(key)
                logger.debug("Attached %s to %s (port match)", spec.file_path, service.name)
                break

    return [
        EnrichedService(service=service, openapi=spec)
        for service, spec in zip(services, matches, strict=True)
    ]


def port_from_url(url: str) -> int | None:
    """Extract the port a base URL points at.

    ``http://localhost:8080/api`` -> 8080.  Without an explicit port, https
    maps to 443 and http to 80.  Relative or unparseable URLs give None.
    """
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError:
        return None

    if not parts.scheme or not parts.netloc:
        return None
    if port is not None:
        return port
    return _DEFAULT_PORTS.get(parts.scheme.lower())


def _normalize(path: str) -> str:
    return str(Path(path).resolve())
