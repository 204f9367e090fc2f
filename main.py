import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import models  # noqa: F401  registers every table on Base.metadata
from core.config import settings
from core.database import Base, engine
from core.errors import register_error_handlers
from routers import (
    auth as auth_router,
    entries as entries_router,
    enrichment as enrichment_router,
    languages as languages_router,
    practice as practice_router,
    profile as profile_router,
    tags as tags_router,
)
from routers.auth import security

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.CREATE_TABLES_ON_STARTUP:
        Base.metadata.create_all(bind=engine)
        logger.info("Tables ensured: %s", ", ".join(sorted(Base.metadata.tables)))
    yield


app = FastAPI(title="Word Inventory", lifespan=lifespan)
security.handle_errors(app)
register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router.router)
app.include_router(profile_router.router)
app.include_router(languages_router.router)
app.include_router(entries_router.router)
app.include_router(enrichment_router.router)
app.include_router(tags_router.router)
app.include_router(practice_router.router)


@app.get("/status")
async def status():
    return {"status": "ok"}

if __name__ == "__main__":
    uvicorn.run("main:app", reload=True, host="127.0.0.1", port=8000)
