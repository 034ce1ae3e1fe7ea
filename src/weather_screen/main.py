from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from .controller import WeatherController, build_controller
from .presentation import build_screen_context, state_payload
from .scheduler import build_scheduler
from .settings import AppSettings, load_settings
from .storage.kv import initialize_database

BASE_DIR = Path(__file__).resolve().parent
WEB_DIR = BASE_DIR / "web"
TEMPLATES_DIR = WEB_DIR / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


class SearchRequest(BaseModel):
    query: str | None = None


class SearchTextRequest(BaseModel):
    text: str = ""


def _get_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def _get_controller(request: Request) -> WeatherController:
    return request.app.state.controller


def _state_response(controller: WeatherController) -> JSONResponse:
    return JSONResponse(state_payload(controller.state))


@asynccontextmanager
async def lifespan(application: FastAPI):
    settings = load_settings()
    initialize_database(settings.db_path)
    controller = build_controller(settings)
    controller.load_recent_searches()
    scheduler = build_scheduler(settings, controller)
    scheduler.start()

    application.state.settings = settings
    application.state.controller = controller
    application.state.scheduler = scheduler
    application.state.started_at_utc = datetime.now(timezone.utc)

    location_task = asyncio.create_task(controller.resolve_current_location())
    application.state.location_task = location_task

    try:
        yield
    finally:
        if not location_task.done():
            location_task.cancel()
        if scheduler.running:
            scheduler.shutdown(wait=False)


app = FastAPI(title="Weather Screen", version="0.1.0", lifespan=lifespan)


@app.get("/", response_class=HTMLResponse)
async def weather_page(request: Request) -> HTMLResponse:
    settings = _get_settings(request)
    controller = _get_controller(request)
    return templates.TemplateResponse(
        request,
        "screen.html",
        {
            "title": settings.yaml.ui.title,
            "footer": settings.yaml.ui.footer,
            "year": datetime.now(settings.timezone).year,
            "poll_interval_ms": settings.yaml.ui.clock_interval_seconds * 1000,
            **build_screen_context(controller.state, settings.timezone),
        },
    )


@app.get("/partials/weather", response_class=HTMLResponse)
async def partial_weather(request: Request) -> HTMLResponse:
    settings = _get_settings(request)
    controller = _get_controller(request)
    return templates.TemplateResponse(
        request,
        "components/weather_grid.html",
        build_screen_context(controller.state, settings.timezone),
    )


@app.get("/partials/clock", response_class=HTMLResponse)
async def partial_clock(request: Request) -> HTMLResponse:
    settings = _get_settings(request)
    controller = _get_controller(request)
    return templates.TemplateResponse(
        request,
        "components/clock.html",
        build_screen_context(controller.state, settings.timezone),
    )


@app.get("/health", response_class=JSONResponse)
async def health(request: Request) -> JSONResponse:
    settings = _get_settings(request)
    state = _get_controller(request).state
    return JSONResponse(
        {
            "status": "ok",
            "service": "weather-screen",
            "environment": settings.env.weather_screen_env,
            "timezone": settings.env.weather_screen_timezone,
            "scheduler_running": request.app.state.scheduler.running,
            "phase": state.phase.value,
            "loading": state.loading,
            "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        }
    )


@app.get("/api/state", response_class=JSONResponse)
async def get_state(request: Request) -> JSONResponse:
    return _state_response(_get_controller(request))


@app.post("/api/refresh", response_class=JSONResponse)
async def refresh(request: Request) -> JSONResponse:
    controller = _get_controller(request)
    await controller.resolve_current_location()
    return _state_response(controller)


@app.post("/api/search", response_class=JSONResponse)
async def search(request: Request, body: SearchRequest) -> JSONResponse:
    controller = _get_controller(request)
    await controller.search(body.query)
    return _state_response(controller)


@app.post("/api/recent/{index}", response_class=JSONResponse)
async def search_recent(request: Request, index: int) -> JSONResponse:
    controller = _get_controller(request)
    try:
        await controller.search_recent(index)
    except IndexError as exc:
        raise HTTPException(status_code=404, detail="Recent search not found") from exc
    return _state_response(controller)


@app.put("/api/search-text", response_class=JSONResponse)
async def set_search_text(request: Request, body: SearchTextRequest) -> JSONResponse:
    controller = _get_controller(request)
    controller.set_search_text(body.text)
    return _state_response(controller)


@app.post("/api/alert/dismiss", response_class=JSONResponse)
async def dismiss_alert(request: Request) -> JSONResponse:
    controller = _get_controller(request)
    controller.dismiss_alert()
    return _state_response(controller)
