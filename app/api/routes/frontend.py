"""
Static frontend routes
Serves the browser client for every path outside the API
Reference: https://fastapi.tiangolo.com/advanced/custom-response/#fileresponse

This router must be included last: its catch-all path would otherwise
shadow the API and health routes.
"""
import logging
from pathlib import Path

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import FileResponse, RedirectResponse

from app.api.routes import health
from app.core.exceptions import RouteError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["frontend"], include_in_schema=False)


def resolve_frontend_file(frontend_dir: Path, path: str) -> Path | None:
    """
    Map a request path onto a file of the frontend directory

    Returns the requested file when it exists inside `frontend_dir`,
    otherwise index.html for client-side routing, or None when the
    frontend has no index.
    """
    root = frontend_dir.resolve()
    if path:
        candidate = (root / path).resolve()
        # Refuse anything that escapes the frontend directory (../)
        if candidate.is_relative_to(root) and candidate.is_file():
            return candidate

    index = root / "index.html"
    if index.is_file():
        return index
    return None


def _is_reserved(path: str, prefixes: tuple[str, ...]) -> bool:
    """True for paths owned by the API or the health checks"""
    return any(path == prefix or path.startswith(f"{prefix}/") for prefix in prefixes)


@router.get("/{full_path:path}")
async def serve_frontend(full_path: str, request: Request) -> Response:
    """
    Serve a frontend asset or the frontend entry document

    Reserved paths (API and health) never get the frontend: with a trailing
    slash they are redirected to the slash-less route, otherwise they are
    unknown routes.

    Raises:
        RouteError: For unknown reserved paths, or when no frontend is installed
    """
    settings = request.app.state.settings
    reserved = (settings.API_PREFIX.strip("/"), health.router.prefix.strip("/"))
    stripped = full_path.rstrip("/")
    if _is_reserved(stripped, reserved):
        if stripped != full_path:
            # 307 keeps the method and body
            url = request.url.replace(path=f"/{stripped}")
            return RedirectResponse(str(url), status_code=status.HTTP_307_TEMPORARY_REDIRECT)
        raise RouteError()

    file_path = resolve_frontend_file(Path(settings.FRONTEND_DIR), full_path)
    if file_path is None:
        logger.warning(f"No frontend found in {settings.FRONTEND_DIR}")
        raise RouteError()
    return FileResponse(file_path)
