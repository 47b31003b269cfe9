"""Main FastAPI server for the interview transcription relay."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, WebSocket
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse, PlainTextResponse

from interview_relay.state import RuntimeDeps
from interview_relay.extraction import router as extraction_router
from interview_relay.state.settings import AppSettings
from interview_relay.config.server import HEALTH_MESSAGE
from interview_relay.runtime.logging import configure_logging
from interview_relay.runtime.dependencies import build_runtime_deps
from interview_relay.runtime.settings_loader import load_settings
from interview_relay.handlers.websocket.manager import handle_websocket_connection

logger = logging.getLogger(__name__)

load_dotenv()
configure_logging()


def create_app(settings: AppSettings | None = None, runtime_deps: RuntimeDeps | None = None) -> FastAPI:
    """Build the app; ``runtime_deps`` overrides lifespan construction (tests)."""
    if runtime_deps is not None:
        settings = runtime_deps.settings
    settings = settings or load_settings()

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        deps = runtime_deps or build_runtime_deps(settings)
        app.state.runtime_deps = deps
        logger.info("runtime: ready")
        try:
            yield
        finally:
            await deps.shutdown()

    app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)
    app.state.settings = settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.server.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(extraction_router)

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        return HEALTH_MESSAGE

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.websocket(settings.server.ws_endpoint_path)
    async def websocket_endpoint(websocket: WebSocket) -> None:
        deps = getattr(app.state, "runtime_deps", None)
        if deps is None:
            raise RuntimeError("Runtime dependencies are not initialized")
        await handle_websocket_connection(websocket, deps)

    return app


app = create_app()


def main() -> None:
    settings: AppSettings = app.state.settings
    logger.info("Server listening on port %s", settings.server.port)
    uvicorn.run(app, host=settings.server.host, port=settings.server.port, log_config=None)


if __name__ == "__main__":
    main()
