"""
HTTP entry point.

    uvicorn api.main:app --reload
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import ensure_directories, settings
from database import init_engine, close_engine, create_tables
from utils import logger, init_logging
from .routes import router

init_logging(app_name="api")
ensure_directories()

APP_NAME = "Inventory Classification Engine"
APP_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_engine()
    await create_tables()
    logger.info(f"{APP_NAME} API started (database: {settings.DATABASE_PATH})")
    yield
    await close_engine()
    logger.info(f"{APP_NAME} API stopped")


app = FastAPI(
    title=APP_NAME,
    description="Multi-criteria ABC classification of products, with criteria derived from reviews by an LLM",
    version=APP_VERSION,
    lifespan=lifespan,
)

# The dashboard is served from another origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api")


@app.get("/")
async def root():
    return {"name": APP_NAME, "version": APP_VERSION, "status": "running"}


def main():
    import uvicorn

    uvicorn.run("api.main:app", host=settings.API_HOST, port=settings.API_PORT)


if __name__ == "__main__":
    main()
