"""Entry point for the miniature telephony network service."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.dependencies import get_exchange
from api.routes import router as api_router
from config.settings import get_settings
from telephony.errors import TelephonyError


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Build the network up front so its numbering shows in the startup log.
    app.dependency_overrides.get(get_exchange, get_exchange)()
    yield


settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = FastAPI(
    title="Telephony Network Simulator",
    description="Place, answer, reject and hang up calls between simulated lines.",
    lifespan=lifespan,
)
app.include_router(api_router, prefix="/api")


@app.exception_handler(TelephonyError)
async def telephony_error_handler(request: Request, exc: TelephonyError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def main() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
