import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from boardgame.config import get_settings
from boardgame.dependencies.sessions import get_session_registry, reset_session_registry
from boardgame.routers import games
from boardgame.services.game.engine import RulesError

logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Board Game Rules API")
    logger.debug("Debug mode: %s", settings.DEBUG)

    get_session_registry()
    logger.info("Session registry initialized")

    yield

    logger.info("Shutting down Board Game Rules API")
    reset_session_registry()
    logger.info("Session cleanup complete")


app = FastAPI(
    title="Board Game Rules API",
    description="Authoritative rules engine for turn-based board games",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
logger.debug("CORS configured with origins: %s", settings.CORS_ORIGINS)

app.include_router(games.router, prefix="/api/v1")
logger.debug("Routers registered: /api/v1/games")


@app.exception_handler(RulesError)
async def rules_error_handler(request: Request, exc: RulesError):
    """Rules errors that escaped a router become a JSON error with their code."""
    http_status = games.error_status_map.get(exc.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    logger.error("Unhandled %s on %s: %s", exc.error_code, request.url.path, exc.message)
    return JSONResponse(
        status_code=http_status,
        content={"detail": exc.message, "error_code": exc.error_code},
    )


@app.get("/")
def root():
    registry = get_session_registry()
    return {"message": "Board Game Rules API", "ruleset": registry.rules.name, "games": len(registry)}


@app.get("/health")
def health():
    return {"status": "healthy"}
