"""Compose port token grammar.

Supported short-syntax forms::

    8080                  host and container are the same
    "80"                  same, as a string
    "8080:80"             host:container
    "8080:80/udp"         with protocol suffix
    "127.0.0.1:8080:80"   ip:host:container (the bind address is discarded)
"""

from __future__ import annotations

import re

from architest.models import PortMapping

_DIGITS = re.compile(r"^\s*([0-9]+)\s*$")
_MIN_PORT = 1
_MAX_PORT = 65535


def parse_port(token: object) -> PortMapping | None:
    """Parse one compose ``ports`` entry.

    Returns None when the token is unparseable; callers drop those entries
    instead of failing the whole compose file.
    """
    # bool is an int subclass; YAML "yes"/"no" must not become port 1/0
    if isinstance(token, bool):
        return None
    if isinstance(token, int):
        if not _in_range(token):
            return None
        return PortMapping(host=token, container=token)
    if not isinstance(token, str):
        return None

    protocol: str | None = None
    port_part = token
    slash = token.rfind("/")
    if slash != -1:
        protocol = token[slash + 1 :] or None
        port_part = token[:slash]

    segments = port_part.split(":")
    if len(segments) == 1:
        host = container = _to_int(segments[0])
    elif len(segments) == 2:
        host, container = _to_int(segments[0]), _to_int(segments[1])
    elif len(segments) == 3:
        host, container = _to_int(segments[1]), _to_int(segments[2])
    else:
        return None

    if host is None or container is None:
        return None
    return PortMapping(host=host, container=container, protocol=protocol)


def _to_int(segment: str) -> int | None:
    match = _DIGITS.match(segment)
    if match is None:
        return None
    value = int(match.group(1))
    return value if _in_range(value) else None


def _in_range(value: int) -> bool:
    return _MIN_PORT <= value <= _MAX_PORT
