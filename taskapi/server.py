"""
Task API Server — HTTP Interface for the Tasks Collection
==========================================================
FastAPI application that exposes TaskService over JSON.

Launch:
    python -m taskapi.server        # Direct
    python -m taskapi.cli start     # Via CLI

Endpoints:
    GET     /                   → Usage page
    GET     /api/tasks          → Full collection
    POST    /api/tasks          → Create a task from {"title": ...}
    PUT     /api/tasks/{id}     → Set completed (defaults to true)
    DELETE  /api/tasks/{id}     → Remove a task, returns the removed record
    OPTIONS *                   → CORS preflight (204)
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskapi import __version__
from taskapi.config import ServerConfig
from taskapi.errors import InvalidRequestError, TaskAPIError
from taskapi.models import CreateTaskRequest, UpdateTaskRequest
from taskapi.service import TaskService
from taskapi.storage.registry import get_storage

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

TASK_ID_PATTERN = re.compile(r"[0-9]+")

USAGE_HTML = """
<h1>Simple Task Manager API</h1>
<p>Use the following endpoints:</p>
<ul>
  <li>GET /api/tasks</li>
  <li>POST /api/tasks</li>
  <li>PUT /api/tasks/&lt;id&gt;</li>
  <li>DELETE /api/tasks/&lt;id&gt;</li>
</ul>
"""


# ─────────────────────────────────────────────────────────────
#  Request Helpers
# ─────────────────────────────────────────────────────────────

def _endpoint_not_found() -> StarletteHTTPException:
    return StarletteHTTPException(status_code=404)


def _parse_task_id(raw: str) -> int:
    """Only ASCII-digit ids match the task routes."""
    if not TASK_ID_PATTERN.fullmatch(raw):
        raise _endpoint_not_found()
    return int(raw)


def _is_json(request: Request) -> bool:
    content_type = request.headers.get("content-type", "")
    return content_type.split(";")[0].strip().lower() == "application/json"


async def _read_json(request: Request) -> Any:
    """Read the whole body; an empty body counts as {}."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        raise InvalidRequestError("Invalid JSON") from None


# ─────────────────────────────────────────────────────────────
#  App Factory
# ─────────────────────────────────────────────────────────────

def create_app(
    service: Optional[TaskService] = None,
    config: Optional[ServerConfig] = None,
) -> FastAPI:
    """Build the application around a TaskService.

    Args:
        service: Service to route requests to. Built from `config` when omitted.
        config: Settings used to pick the storage backend.
    """
    if service is None:
        config = config or ServerConfig.from_env()
        service = TaskService(get_storage(config))

    app = FastAPI(title="Task API", version=__version__, redirect_slashes=False)
    app.state.service = service

    # ── Middleware ──────────────────────────────────────────

    @app.middleware("http")
    async def cors(request: Request, call_next):
        if request.method == "OPTIONS":
            response = Response(status_code=204)
        else:
            response = await call_next(request)
        for name, value in CORS_HEADERS.items():
            response.headers[name] = value
        return response

    # ── Error Translation ───────────────────────────────────

    @app.exception_handler(TaskAPIError)
    async def handle_task_error(request: Request, exc: TaskAPIError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(exc.to_dict(), status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        # Unknown paths and unsupported methods are both "no such endpoint".
        if exc.status_code in (404, 405):
            return JSONResponse({"error": "Endpoint not found."}, status_code=404)
        return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code)

    # ── Routes ──────────────────────────────────────────────

    @app.get("/", response_class=HTMLResponse)
    async def index():
        """Serve the usage page."""
        return HTMLResponse(USAGE_HTML)

    @app.get("/api/tasks")
    async def list_tasks():
        """Return the full collection."""
        tasks = await asyncio.to_thread(service.list_tasks)
        return JSONResponse([t.to_dict() for t in tasks])

    @app.post("/api/tasks")
    async def create_task(request: Request):
        """Create a task from {"title": ...} or {"description": ...}."""
        body = await _read_json(request)
        try:
            payload = CreateTaskRequest.model_validate(body)
        except ValidationError:
            raise InvalidRequestError("Task title is required.") from None

        task = await asyncio.to_thread(service.create_task, payload.label)
        return JSONResponse(task.to_dict(), status_code=201)

    @app.put("/api/tasks/{task_id}")
    async def update_task(task_id: str, request: Request):
        """Set the completed flag. Without a boolean in the body it becomes true."""
        tid = _parse_task_id(task_id)
        await asyncio.to_thread(service.get_task, tid)

        completed = True
        if _is_json(request):
            body = await _read_json(request)
            if isinstance(body, dict):
                completed = UpdateTaskRequest.model_validate(body).resolved_completed

        task = await asyncio.to_thread(service.complete_task, tid, completed)
        return JSONResponse(task.to_dict())

    @app.delete("/api/tasks/{task_id}")
    async def delete_task(task_id: str):
        """Remove a task and echo it back."""
        tid = _parse_task_id(task_id)
        removed = await asyncio.to_thread(service.delete_task, tid)
        return JSONResponse(removed.to_dict())

    return app


app = create_app()


# ─────────────────────────────────────────────────────────────
#  Startup
# ─────────────────────────────────────────────────────────────

def run_server(config: Optional[ServerConfig] = None):
    """Launch the Task API server and block until it is stopped."""
    import uvicorn

    config = config or ServerConfig.from_env()
    server_app = create_app(config=config)

    print(f"Server is running at http://localhost:{config.port}")
    logger.info("Storage: %s (%s)", config.storage, config.data_file)

    uvicorn.run(server_app, host=config.host, port=config.port, log_level=config.log_level)


if __name__ == "__main__":
    run_server()
