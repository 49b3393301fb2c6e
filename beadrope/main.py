"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from beadrope import __version__
from beadrope.config import settings
from beadrope.jbb import JbbParseError

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.beadrope_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="beadrope",
        description="Bead-rope crochet pattern engine — editing, rope layouts and bead reports",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(JbbParseError)
    async def _jbb_parse_error(request: Request, exc: JbbParseError) -> JSONResponse:
        logger.info("Rejected JBB input on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    from beadrope.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
