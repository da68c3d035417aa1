"""Locate OpenAPI/Swagger spec files at conventional paths.

Discovery is an existence check only: files are never opened here.
"""

from __future__ import annotations

from pathlib import Path

_SPEC_FILENAMES: tuple[str, ...] = (
    "openapi.json",
    "openapi.yml",
    "openapi.yaml",
    "swagger.json",
    "swagger.yml",
    "swagger.yaml",
)

# Project-wide search: root, docs/, api/ (18 candidates)
SPEC_SEARCH_PATHS: tuple[str, ...] = (
    *_SPEC_FILENAMES,
    *(f"docs/{name}" for name in _SPEC_FILENAMES),
    *(f"api/{name}" for name in _SPEC_FILENAMES),
)

# Inside a service build context only openapi.* is looked for under docs/ and api/
SERVICE_SPEC_SEARCH_PATHS: tuple[str, ...] = (
    *_SPEC_FILENAMES,
    *(f"docs/{name}" for name in _SPEC_FILENAMES if name.startswith("openapi")),
    *(f"api/{name}" for name in _SPEC_FILENAMES if name.startswith("openapi")),
)


def discover_specs(root_dir: Path | str) -> list[str]:
    """Return absolute paths of spec files found under ``root_dir``.

    Paths come back in SPEC_SEARCH_PATHS order.
    """
    return _existing(Path(root_dir), SPEC_SEARCH_PATHS)


def discover_scoped_specs(root_dir: Path | str, build_context: str | None) -> list[str]:
    """Return spec files inside a service's build context.

    ``build_context`` is resolved relative to ``root_dir``.  Returns an empty
    list when there is no build context or it is not an existing directory.
    """
    if not build_context:
        return []

    try:
        service_dir = (Path(root_dir) / build_context).resolve()
        if not service_dir.is_dir():
            return []
    except (OSError, ValueError):
        # e.g. an embedded NUL byte in the build path
        return []
    return _existing(service_dir, SERVICE_SPEC_SEARCH_PATHS)


def _existing(base: Path, candidates: tuple[str, ...]) -> list[str]:
    base = base.resolve()
    return [str(base / rel) for rel in candidates if (base / rel).is_file()]
