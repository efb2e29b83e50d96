"""API key guard for mutating endpoints."""

from __future__ import annotations

from fastapi import Header, HTTPException, Request


def require_api_key(
    request: Request,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
) -> None:
    # If PAM_API_KEY is not set, we allow requests (dev mode).
    expected = getattr(request.app.state, "api_key", "")
    if not expected:
        return

    if x_api_key != expected:
        raise HTTPException(status_code=401, detail="Invalid API key")
