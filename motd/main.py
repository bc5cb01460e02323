"""FastAPI application entry point for the image of the day."""

import argparse
import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.middleware.base import BaseHTTPMiddleware

from motd import __version__
from motd.config import Settings, get_settings
from motd.scheduler.manager import RefreshScheduler
from motd.scheduler.refresh import DailyRefresher
from motd.web.routes import router as web_router

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class CacheControlMiddleware(BaseHTTPMiddleware):
    """Set Cache-Control headers for the page and published images."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        path = request.url.path

        if path.startswith("/assets/"):
            # Asset names embed the date, so a name is never reused for another day
            response.headers["Cache-Control"] = "public, max-age=86400"
        elif path in ("/", "/favicon.ico"):
            response.headers["Cache-Control"] = "no-cache"

        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every incoming request."""

    async def dispatch(self, request: Request, call_next):
        client = f"{request.client.host}:{request.client.port}" if request.client else "-"
        logger.info(f"request from {client}: {request.method} {request.url.path}")
        return await call_next(request)


def configure_logging(settings: Settings) -> None:
    """Log to stdout, and also to LOG_FILE when one is configured."""
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("motd").setLevel(level)

    if not settings.log_file:
        return
    root = logging.getLogger()
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == os.path.abspath(settings.log_file):
            return
    try:
        file_handler = logging.FileHandler(settings.log_file, mode="a", encoding="utf-8")
    except OSError as e:
        logger.error(f"Failed to open log file: {e}")
        return
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(file_handler)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown events."""
    settings: Settings = app.state.settings
    refresher: DailyRefresher = app.state.refresher
    logger.info("Starting image of the day...")

    # Publish an image before serving the first request
    await refresher.refresh_now()

    if not settings.disable_background:
        scheduler = RefreshScheduler(refresher)
        scheduler.start()
        app.state.scheduler = scheduler
        logger.info(
            f"Server started on {settings.host}:{settings.port}. "
            f"Images will be renewed at midnight in timezone '{settings.timezone}'."
        )
    else:
        app.state.scheduler = None
        logger.info("Background refresh disabled (DISABLE_BACKGROUND=true)")

    yield

    # Shutdown
    logger.info("Shutting down image of the day...")
    if app.state.scheduler:
        await app.state.scheduler.stop()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around one refresher owned by ``app.state``."""
    settings = settings or get_settings()
    configure_logging(settings)

    # StaticFiles needs the directory to exist when mounted
    settings.asset_dir.mkdir(parents=True, exist_ok=True)

    app = FastAPI(
        title="Image of the Day",
        description="One image per day, renewed at local midnight",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.refresher = DailyRefresher(
        image_dir=settings.image_dir,
        asset_dir=settings.asset_dir,
        tz=settings.tz,
    )
    app.state.scheduler = None

    # Added in reverse: RequestLogging -> GZip -> CacheControl
    app.add_middleware(CacheControlMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)

    app.mount("/assets", StaticFiles(directory=settings.asset_dir), name="assets")
    app.include_router(web_router)
    return app


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    # Unset flags stay None so the environment (validated once, in
    # settings_from_args) supplies the value
    parser = argparse.ArgumentParser(description="Serve one image per day, renewed at midnight")
    parser.add_argument("--imagedir", help="Directory containing all images (env IMAGE_DIR)")
    parser.add_argument("--assetdir", help="Directory for assets serving the image (env ASSET_DIR)")
    parser.add_argument("--logfile",
                        help="Log file path, empty disables file logging (env LOG_FILE)")
    parser.add_argument("--host", help="Interface to bind (env HOST)")
    parser.add_argument("--port", type=int, help="Port to serve (env PORT)")
    parser.add_argument("--timezone", help="Timezone for image renewal (env TIMEZONE)")
    return parser.parse_args(argv)


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Command line flags override the environment."""
    flags = {
        "image_dir": args.imagedir,
        "asset_dir": args.assetdir,
        "log_file": args.logfile,
        "host": args.host,
        "port": args.port,
        "timezone": args.timezone,
    }
    return Settings(**{k: v for k, v in flags.items() if v is not None})


def run(argv: Optional[list[str]] = None) -> None:
    import uvicorn

    settings = settings_from_args(parse_args(argv))
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
