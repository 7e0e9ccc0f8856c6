"""FastAPI application for the blockstrings local JSON API."""

import secrets
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Query, Security
from fastapi.middleware.cors import CORSMiddleware
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from .. import __version__
from ..core.strings import all_strings, generate_unique_name, rename_string
from ..flyout import flyout_category, flyout_xml


class RenameRequest(BaseModel):
    old_name: str
    new_name: str


def create_app(runtime: Any, token: str | None = None, enable_cors: bool = False) -> FastAPI:
    """
    Create FastAPI application with runtime injected.

    Renames mutate runtime.workspace in memory; nothing is written to disk.

    Args:
        runtime: Runtime instance with workspace and config
        token: Bearer token for authentication (None to disable auth)
        enable_cors: Enable CORS middleware

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Blockstrings API",
        description="Local JSON API for string names in a block workspace",
        version=__version__,
        docs_url="/docs" if token is None else None,
        redoc_url="/redoc" if token is None else None,
    )

    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origin_regex=r"https?://(localhost|127\.0\.0\.1)(:\d+)?",
            allow_methods=["GET", "POST"],
            allow_headers=["Authorization", "Content-Type"],
        )

    bearer = HTTPBearer(auto_error=False)

    async def verify_token(
        credentials: HTTPAuthorizationCredentials | None = Security(bearer),  # noqa: B008
    ) -> None:
        """Reject requests without the configured token; open when token is None."""
        if token is None:
            return
        if credentials is None or not secrets.compare_digest(credentials.credentials, token):
            raise HTTPException(status_code=401, detail="Invalid or missing token")

    @app.get("/health")
    async def health(auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok"}

    @app.get("/strings")
    async def list_strings(
        root: str | None = Query(None, description="Only look under this block id"),
        sort: bool = Query(False, description="Sort case-insensitively"),
        auth: None = Depends(verify_token),
    ) -> dict[str, Any]:
        """String names in use."""
        target: Any = runtime.workspace
        if root is not None:
            target = runtime.workspace.get_block_by_id(root)
            if target is None:
                raise HTTPException(status_code=404, detail=f"Block {root} not found")
        names = all_strings(target)
        if sort:
            names = sorted(names, key=str.lower)
        return {"strings": names}

    @app.get("/strings/suggest")
    async def suggest(auth: None = Depends(verify_token)) -> dict[str, Any]:
        """An unused string name."""
        return {"name": generate_unique_name(runtime.workspace)}

    @app.post("/strings/rename")
    async def rename(
        body: RenameRequest, auth: None = Depends(verify_token)
    ) -> dict[str, Any]:
        """Rename a string name in every block."""
        rename_string(body.old_name, body.new_name, runtime.workspace)
        return {"strings": all_strings(runtime.workspace)}

    @app.get("/flyout")
    async def flyout(auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Flyout block templates as XML."""
        cfg = runtime.config.flyout
        blocks = flyout_category(
            runtime.workspace, cfg.block_types, default_name=cfg.default_name
        )
        return {"xml": flyout_xml(blocks)}

    return app


def generate_token() -> str:
    """Generate a random bearer token."""
    return secrets.token_urlsafe(32)
