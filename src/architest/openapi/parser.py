"""OpenAPI 3.x / Swagger 2.x spec parser.

Reads one spec file (JSON or YAML), normalizes the differences between the
two major versions and extracts endpoints with per-status-code response
schemas.  ``$ref`` resolution is one level deep and internal only: a schema
that is a reference to ``#/components/schemas/<name>`` or
``#/definitions/<name>`` is replaced by the pooled schema; anything else is
left as written.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

import yaml

from architest.compose.parser import yaml_error_position
from architest.errors import (
    DocumentNotFoundError,
    MalformedDocumentError,
    NotAnAPISpecError,
    SchemaViolationError,
)
from architest.models import OpenAPIEndpoint, OpenAPIResponse, OpenAPIResult

logger = logging.getLogger(__name__)

HTTP_METHODS: tuple[str, ...] = ("get", "post", "put", "delete", "patch", "options", "head")

DEFAULT_TITLE = "Untitled API"
DEFAULT_VERSION = "0.0.0"

_REF_PATTERN = re.compile(r"^#/(?:components/schemas|definitions)/(.+)$")

_SchemaPool = dict[str, Any]


# ─── Public API ──────────────────────────────────────────────


def parse_spec(filepath: Path | str) -> OpenAPIResult:
    """Parse an OpenAPI/Swagger file into an OpenAPIResult.

    Files ending in ``.json`` are parsed as JSON, everything else as YAML.

    Raises:
        DocumentNotFoundError: If the file does not exist.
        MalformedDocumentError: If the file cannot be read or parsed.
        SchemaViolationError: If the document is not a mapping.
        NotAnAPISpecError: If neither ``openapi`` nor ``swagger`` is present.
    """
    path = Path(filepath)
    if not path.is_file():
        raise DocumentNotFoundError(f"OpenAPI spec file not found: {path}", path=str(path))

    doc = _load_document(path)
    if not isinstance(doc, dict):
        raise SchemaViolationError(
            f"Invalid OpenAPI spec: {path} -- expected an object.", path=str(path)
        )

    if not doc.get("openapi") and not doc.get("swagger"):
        raise NotAnAPISpecError(
            f"File {path} does not appear to be an OpenAPI spec "
            '(missing "openapi" or "swagger" field).',
            path=str(path),
        )

    info = _mapping(doc.get("info"))
    pool = _schema_pool(doc)
    endpoints = tuple(_extract_endpoints(doc.get("paths"), pool))

    logger.debug("Parsed %s: %d endpoints", path, len(endpoints))

    return OpenAPIResult(
        file_path=str(path),
        title=_text(info.get("title"), DEFAULT_TITLE),
        version=_text(info.get("version"), DEFAULT_VERSION),
        base_url=_resolve_base_url(doc),
        endpoints=endpoints,
    )


def resolve_ref(schema: dict[str, Any], pool: _SchemaPool) -> dict[str, Any]:
    """Resolve a single internal ``$ref`` against the schema pool.

    Returns the pooled schema when the reference matches and the name is
    known, otherwise ``schema`` unchanged.  Never follows a second hop.
    """
    ref = schema.get("$ref")
    if not isinstance(ref, str):
        return schema

    match = _REF_PATTERN.match(ref)
    if match is None:
        return schema

    resolved = pool.get(match.group(1))
    if isinstance(resolved, dict):
        return resolved
    return schema


# ─── Document Loading ────────────────────────────────────────


def _load_document(path: Path) -> object:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MalformedDocumentError(
            f"Could not read OpenAPI spec {path}: {exc}", path=str(path)
        ) from exc

    if path.suffix.lower() == ".json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise MalformedDocumentError(
                f"Failed to parse OpenAPI spec {path}: {exc}",
                path=str(path),
                line=exc.lineno,
                column=exc.colno,
            ) from exc

    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        line, column = yaml_error_position(exc)
        raise MalformedDocumentError(
            f"Failed to parse OpenAPI spec {path}: {exc}",
            path=str(path),
            line=line,
            column=column,
        ) from exc


# ─── Normalization ───────────────────────────────────────────


def _resolve_base_url(doc: dict[str, Any]) -> str | None:
    """Prefer ``servers[0].url`` (3.x), else build one from host/basePath (2.x)."""
    servers = doc.get("servers")
    if isinstance(servers, list) and servers:
        first = servers[0]
        url = first.get("url") if isinstance(first, dict) else None
        if isinstance(url, str) and url:
            return url

    if not doc.get("swagger"):
        return None

    host = doc.get("host")
    if not isinstance(host, str) or not host:
        return None

    schemes = doc.get("schemes")
    scheme = "http"
    if isinstance(schemes, list) and schemes and isinstance(schemes[0], str):
        scheme = schemes[0]
    base_path = doc.get("basePath")
    if not isinstance(base_path, str):
        base_path = ""
    return f"{scheme}://{host}{base_path}"


def _schema_pool(doc: dict[str, Any]) -> _SchemaPool:
    """``components.schemas`` (3.x) wins over ``definitions`` (2.x)."""
    schemas = _mapping(doc.get("components")).get("schemas")
    if isinstance(schemas, dict):
        return schemas
    definitions = doc.get("definitions")
    if isinstance(definitions, dict):
        return definitions
    return {}


# ─── Endpoint Extraction ─────────────────────────────────────


def _extract_endpoints(raw_paths: object, pool: _SchemaPool) -> list[OpenAPIEndpoint]:
    endpoints: list[OpenAPIEndpoint] = []
    for route, path_item in _mapping(raw_paths).items():
        if not isinstance(path_item, dict):
            continue
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if not isinstance(operation, dict):
                continue
            summary = operation.get("summary")
            operation_id = operation.get("operationId")
            endpoints.append(
                OpenAPIEndpoint(
                    method=method.upper(),
                    path=str(route),
                    summary=summary if isinstance(summary, str) else None,
                    operation_id=operation_id if isinstance(operation_id, str) else None,
                    responses=_extract_responses(operation.get("responses"), pool),
                )
            )
    return endpoints


def _extract_responses(raw: object, pool: _SchemaPool) -> tuple[OpenAPIResponse, ...]:
    responses: list[OpenAPIResponse] = []
    for status_code, definition in _mapping(raw).items():
        if not isinstance(definition, dict):
            continue
        description = definition.get("description")
        responses.append(
            OpenAPIResponse(
                # YAML loads unquoted 200 as an int
                status_code=str(status_code),
                description=description if isinstance(description, str) else None,
                schema=_response_schema(definition, pool),
            )
        )
    return tuple(responses)


def _response_schema(definition: dict[str, Any], pool: _SchemaPool) -> dict[str, Any] | None:
    """``content["application/json"].schema`` (3.x), falling back to ``schema`` (2.x)."""
    media = _mapping(_mapping(definition.get("content")).get("application/json"))
    schema = media.get("schema")
    if isinstance(schema, dict):
        return resolve_ref(schema, pool)

    schema = definition.get("schema")
    if isinstance(schema, dict):
        return resolve_ref(schema, pool)
    return None


# ─── Utility Helpers ─────────────────────────────────────────


def _mapping(value: object) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _text(value: object, default: str) -> str:
    if value is None:
        return default
    if isinstance(value, str):
        return value
    # e.g. YAML ``version: 1.0`` loads as a float
    return str(value)
