"""Docker Compose parser -- locate a compose file and project it into DockerServices.

Only the v2+ shape (a top-level ``services`` mapping) is supported.  The
legacy flat v1 layout is rejected with a SchemaViolationError instead of
being misread as a list of services.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from pathlib import Path

import yaml

from architest.compose.ports import parse_port
from architest.errors import (
    DocumentNotFoundError,
    MalformedDocumentError,
    SchemaViolationError,
)
from architest.models import DockerComposeResult, DockerService, PortMapping

logger = logging.getLogger(__name__)

COMPOSE_FILENAMES: tuple[str, ...] = (
    "docker-compose.yml",
    "docker-compose.yaml",
    "compose.yml",
    "compose.yaml",
)


# ─── Public API ──────────────────────────────────────────────


def find_compose_file(project_path: Path | str) -> Path | None:
    """Return the first compose file that exists, checking COMPOSE_FILENAMES in order."""
    root = Path(project_path)
    for filename in COMPOSE_FILENAMES:
        candidate = root / filename
        if candidate.is_file():
            return candidate
    return None


def parse_project_compose(project_path: Path | str) -> DockerComposeResult:
    """Find and parse the compose file in a project directory.

    Raises:
        DocumentNotFoundError: If none of COMPOSE_FILENAMES exists.
        MalformedDocumentError: If the file is not valid YAML.
        SchemaViolationError: If the file has no ``services`` mapping.
    """
    filepath = find_compose_file(project_path)
    if filepath is None:
        raise DocumentNotFoundError(
            f"No Docker Compose file found in {project_path}. "
            f"Looked for: {', '.join(COMPOSE_FILENAMES)}",
            path=str(project_path),
        )
    return parse_compose_file(filepath)


def parse_compose_file(filepath: Path | str) -> DockerComposeResult:
    """Parse a compose file into a DockerComposeResult.

    Services keep their source order.  Unparseable port entries are dropped,
    never fatal.
    """
    path = Path(filepath)
    if not path.is_file():
        raise DocumentNotFoundError(f"Docker Compose file not found: {path}", path=str(path))

    text = _read_text(path)
    doc = _load_yaml(text, path)

    if not isinstance(doc, dict):
        raise SchemaViolationError(
            f"Invalid Docker Compose file: {path} -- expected a YAML mapping.",
            path=str(path),
        )

    raw_services = doc.get("services")
    if not isinstance(raw_services, dict):
        raise SchemaViolationError(
            f'No "services" key found in {path}. '
            "architest requires Docker Compose v2+ format.",
            path=str(path),
        )

    services: list[DockerService] = []
    seen: set[str] = set()
    for raw_name, definition in raw_services.items():
        # 1 and '1' are distinct YAML keys but the same service name
        name = str(raw_name)
        if name in seen:
            logger.debug("Skipping duplicate service %r in %s", name, path)
            continue
        seen.add(name)
        services.append(_parse_service(name, definition, source=path))
    version = doc.get("version")

    return DockerComposeResult(
        file_path=str(path),
        version=version if isinstance(version, str) else None,
        services=tuple(services),
    )


# ─── Field Extraction ────────────────────────────────────────


def _parse_service(name: str, definition: object, *, source: Path) -> DockerService:
    """Project one ``services.<name>`` entry into a DockerService."""
    if not isinstance(definition, dict):
        # "web:" with an empty body loads as None
        return DockerService(name=name)

    image = definition.get("image")
    return DockerService(
        name=name,
        image=image if isinstance(image, str) else None,
        build=_parse_build(definition.get("build")),
        ports=_parse_ports(definition.get("ports"), service=name, source=source),
        depends_on=_parse_depends_on(definition.get("depends_on")),
    )


def _parse_ports(raw: object, *, service: str, source: Path) -> tuple[PortMapping, ...]:
    if not isinstance(raw, list):
        return ()

    ports: list[PortMapping] = []
    for entry in raw:
        mapping = parse_port(entry)
        if mapping is None:
            logger.debug(
                "Skipping unparseable port %r for service %s in %s", entry, service, source
            )
            continue
        ports.append(mapping)
    return tuple(ports)


def _parse_build(raw: object) -> str | None:
    """Accept ``build: ./dir`` or ``build: {context: ./dir, ...}``."""
    if isinstance(raw, str):
        return raw
    if isinstance(raw, dict):
        context = raw.get("context")
        if isinstance(context, str):
            return context
    return None


def _parse_depends_on(raw: object) -> tuple[str, ...]:
    """Flatten ``depends_on`` from short or long syntax.

    Short: ``depends_on: [db, redis]``
    Long:  ``depends_on: {db: {condition: service_healthy}, redis: {}}``
    """
    if isinstance(raw, list):
        return tuple(v for v in raw if isinstance(v, str))
    if isinstance(raw, dict):
        return tuple(str(key) for key in raw)
    return ()


# ─── Utility Helpers ─────────────────────────────────────────


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MalformedDocumentError(
            f"Could not read Docker Compose file {path}: {exc}", path=str(path)
        ) from exc


class _FirstKeyLoader(yaml.SafeLoader):
    """SafeLoader where a key repeated in one mapping keeps its first value.

    Merge keys (``<<: *defaults``) are left alone, so explicit keys still
    override merged ones.
    """

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            seen: set[object] = set()
            pairs = []
            for key_node, value_node in node.value:
                if key_node.tag == "tag:yaml.org,2002:merge":
                    pairs.append((key_node, value_node))
                    continue
                key = self.construct_object(key_node, deep=deep)
                # unhashable keys fall through to SafeConstructor's error
                if isinstance(key, Hashable):
                    if key in seen:
                        continue
                    seen.add(key)
                pairs.append((key_node, value_node))
            node.value = pairs
        return super().construct_mapping(node, deep=deep)


def _load_yaml(text: str, path: Path) -> object:
    try:
        return yaml.load(text, Loader=_FirstKeyLoader)
    except yaml.YAMLError as exc:
        line, column = yaml_error_position(exc)
        raise MalformedDocumentError(
            f"Failed to parse YAML in {path}: {exc}",
            path=str(path),
            line=line,
            column=column,
        ) from exc


def yaml_error_position(exc: yaml.YAMLError) -> tuple[int | None, int | None]:
    """Return the 1-based (line, column) of a PyYAML error, if it has a mark."""
    mark = getattr(exc, "problem_mark", None) or getattr(exc, "context_mark", None)
    if mark is None:
        return None, None
    return mark.line + 1, mark.column + 1
