"""Hoard API application: middleware, logging and router wiring."""
import logging

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.routers import api_keys, assets, bookmarks, feeds, health, lists, prompts, tags, users
from core.config import get_settings


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Stamp HSTS, nosniff and frame-deny headers on every response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        response = await call_next(request)
        # one year, subdomains included
        response.headers["Strict-Transport-Security"] = (
            "max-age=31536000; includeSubDomains"
        )
        response.headers["X-Content-Type-Options"] = "nosniff"
        # JSON API, never rendered in a frame
        response.headers["X-Frame-Options"] = "DENY"
        return response


app_settings = get_settings()

logging.basicConfig(
    level=app_settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Hoard API",
    description="A bookmark manager for links, notes and files with tags, lists and RSS feeds.",
    version="0.1.0",
)

# Registered first, so it runs inside CORS
app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(bookmarks.router)
app.include_router(tags.router)
app.include_router(lists.router)
app.include_router(feeds.router)
app.include_router(api_keys.router)
app.include_router(prompts.router)
app.include_router(assets.router)
