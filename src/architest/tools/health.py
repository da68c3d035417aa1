"""health tool -- liveness check for the architest server."""

from __future__ import annotations

import architest


async def health() -> dict[str, object]:
    """Report that the architest server is up.

    Returns:
        Dict with ``status`` ("ok") and the installed architest ``version``.
    """
    return {"status": "ok", "version": architest.__version__}
