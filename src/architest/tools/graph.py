"""service_graph tool -- dependency graph of the compose services."""

from __future__ import annotations

from mcp.server.fastmcp import Context

from architest.errors import ArchitestError
from architest.graph.builder import build_service_graph
from architest.tools._helpers import error_payload, run_scan


async def service_graph(
    ctx: Context,
    path: str = ".",
) -> dict[str, object]:
    """Return the service dependency graph of a project as nodes and edges.

    Runs the same scan as scan_project, then emits one node per compose
    service (with its container ports and the title of its attached spec)
    and one edge per depends_on entry. Edges whose target is not a compose
    service are flagged ``external``. No layout is computed.

    Args:
        path: Path to the project directory. Defaults to current directory (".").

    Returns:
        Dict with ``nodes`` and ``edges``, or success=False, error, kind.
    """
    try:
        result = await run_scan(path)
        return build_service_graph(result).to_dict()

    except ArchitestError as exc:
        return error_payload(exc)
    except Exception as exc:
        await ctx.error(f"Unexpected error in service_graph: {exc}")
        return {"success": False, "error": f"Internal error: {type(exc).__name__}"}
