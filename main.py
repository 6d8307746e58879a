import argparse
import logging
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager

import sys
from pathlib import Path

# Add project root to path for package imports
base_dir = Path(__file__).parent
sys.path.insert(0, str(base_dir))

from config import load_config
from db.content import init_content
from db.store import init_store
from routes import catalog, items, lessons, user, static  # Import routers
from utils.errors import StateWriteError, UnknownItemError


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# First-run init
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: config, state file and content catalog
    config = load_config()
    configure_logging(config["logging"]["level"])
    init_store(config)
    init_content(config)
    yield


app = FastAPI(
    title="Langstep",
    description="Local-first language and topic learning with spaced repetition",
    lifespan=lifespan,
)

# Include routers; the static catch-all must stay last
app.include_router(catalog.router, prefix="/api", tags=["catalog"])
app.include_router(user.router, prefix="/api", tags=["user"])
app.include_router(items.router, prefix="/api", tags=["items"])
app.include_router(lessons.router, prefix="/api", tags=["lessons"])
app.include_router(static.router, tags=["static"])


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def invalid_body(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": "Invalid JSON"})


@app.exception_handler(UnknownItemError)
async def unknown_item(request: Request, exc: UnknownItemError):
    return JSONResponse(status_code=404, content={"error": "Unknown item"})


@app.exception_handler(StateWriteError)
async def state_write_failed(request: Request, exc: StateWriteError):
    return JSONResponse(status_code=500, content={"error": "Could not save progress"})


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Langstep App")
    parser.add_argument("--init", action="store_true", help="Initialize state file and config")
    parser.add_argument("--dev", action="store_true", help="Run in dev mode with reload")
    args = parser.parse_args()
    config = load_config()
    configure_logging(config["logging"]["level"])
    if args.init:
        init_store(config)
        print(f"State initialized in {config['paths']['data_dir']} and config copied to ~/.langstep/")
        exit(0)
    # Run server
    server_cfg = config["server"]
    uvicorn.run(
        "main:app",
        host=server_cfg["host"],
        port=server_cfg["port"],
        reload=args.dev,
        log_level=config["logging"]["level"],
    )
