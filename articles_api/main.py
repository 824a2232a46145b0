import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from articles_api import __version__
from articles_api.config import settings
from articles_api.database import STORE_ERRORS, StorageGateway
from articles_api.errors import register_exception_handlers
from articles_api.routers import articles

logger = logging.getLogger(__name__)

GREETING = "Bienvenue sur l'API des articles !"

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    gateway = StorageGateway.from_settings(settings)
    try:
        await gateway.create_schema()
    except STORE_ERRORS as exc:
        # Keep serving; requests will report the store error themselves.
        logger.error("Could not create table 'articles': %s", exc)
    app.state.gateway = gateway
    yield
    # Shutdown
    await gateway.dispose()

app = FastAPI(
    title="Articles API",
    description="CRUD service for a single articles resource",
    version=__version__,
    lifespan=lifespan,
)

# Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Routers
app.include_router(articles.router)

@app.get("/", response_class=PlainTextResponse)
async def root():
    return GREETING

@app.get("/health")
async def health():
    return {"status": "healthy", "version": __version__}


def run() -> None:
    """Console entry point: serve the app on ``settings.PORT``."""
    uvicorn.run(
        "articles_api.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        log_level="debug" if settings.DEBUG else "info",
    )


if __name__ == "__main__":
    run()
