"""Role router: which routes this process exposes, decided once at startup."""
from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from .aggregator import Aggregator
from .durations import parse_duration
from .errors import FatalError
from .metrics import install_metrics
from .parts import PartResult, serve_part
from .readiness import ReadinessGate, open_gate_async
from .rendering import ASSETS_DIR, render_home
from .settings import Settings, settings

logger = logging.getLogger(__name__)

ASSETS_PREFIX = "/assets"


def _terminate(exc: FatalError) -> None:
    logging.shutdown()
    os._exit(1)


def _install_probes(app: FastAPI, gate: ReadinessGate) -> None:
    @app.get("/healthz")
    def healthz() -> dict[str, str]:
        return {"status": "healthy"}

    @app.get("/readyz")
    def readyz() -> JSONResponse:
        if gate.is_ready():
            return JSONResponse({"status": "ready"}, status_code=status.HTTP_200_OK)
        return JSONResponse({"status": "not ready"}, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)


def _install_frontend(app: FastAPI, aggregator: Aggregator) -> None:
    @app.get("/", response_class=HTMLResponse)
    def home() -> HTMLResponse:
        return HTMLResponse(render_home(aggregator.aggregate()))


def _install_assets(app: FastAPI) -> None:
    app.mount(ASSETS_PREFIX, StaticFiles(directory=str(ASSETS_DIR)), name="assets")


def _install_part_route(app: FastAPI, config: Settings, path: str) -> None:
    # Both segments of the monolith route are free-form; only the last one names the part.
    # Must not need a worker thread: the monolith home handler calls it while holding one.
    @app.get(path, response_model=PartResult)
    async def part(part_name: str) -> PartResult:
        return serve_part(part_name, config)


def create_app(
    config: Settings = settings,
    *,
    gate: ReadinessGate | None = None,
    transport: httpx.BaseTransport | None = None,
    on_fatal: Callable[[FatalError], None] | None = None,
) -> FastAPI:
    """Build the app for ``config.component``.

    Raises InvalidDuration for a malformed startup delay, before anything
    can listen.
    """
    delay_s = max(0.0, parse_duration(config.startup_delay)) if config.startup_delay else 0.0
    gate = gate or ReadinessGate()
    fatal_hook = on_fatal or _terminate

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # uvicorn binds only after this returns, so the delay holds back the listener too.
        if delay_s > 0:
            logger.info("Delaying startup by %ss", delay_s)
            await asyncio.sleep(delay_s)
        open_gate_async(gate)
        yield

    app = FastAPI(title="podtato-head", version=config.version, lifespan=lifespan)
    app.state.settings = config
    app.state.gate = gate

    @app.exception_handler(FatalError)
    async def _fatal(request: Request, exc: FatalError) -> PlainTextResponse:
        logger.critical("fatal error serving %s: %s", request.url.path, exc)
        fatal_hook(exc)
        return PlainTextResponse("Internal Server Error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    install_metrics(app)
    _install_probes(app, gate)

    role = config.component
    if role == "all":
        aggregator = Aggregator(config, transport=transport)
        app.state.aggregator = aggregator
        _install_frontend(app, aggregator)
        _install_assets(app)
        _install_part_route(app, config, "/images/{part_dir}/{part_name}")
        logger.info("Will listen on port %s in monolith mode", config.port)
    elif role == "frontend":
        aggregator = Aggregator(config, transport=transport)
        app.state.aggregator = aggregator
        _install_frontend(app, aggregator)
        _install_assets(app)
        logger.info("Will listen on port %s in frontend mode", config.port)
    else:
        _install_assets(app)
        _install_part_route(app, config, f"/images/{role}/{{part_name}}")
        logger.info("Will listen on port %s for %s service", config.port, role)

    return app


def serve(config: Settings = settings) -> None:
    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)
