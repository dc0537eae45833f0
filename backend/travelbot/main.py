"""FastAPI entrypoint for the travel intake chatbot."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from travelbot.api.routes import airtable_service, reply_composer
from travelbot.api.routes import router as api_router
from travelbot.core.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "[Init] Reply service %s | Provider=%s Model=%s",
        "ENABLED" if reply_composer.enabled else "DISABLED",
        reply_composer.provider,
        reply_composer.model,
    )
    logger.info(
        "[Init] Airtable %s | Base=%s Table=%s",
        "ENABLED" if airtable_service.enabled else "DISABLED",
        settings.airtable_base_id or "n/a",
        settings.airtable_table or "n/a",
    )
    yield
    logger.info("Shutting down %s", settings.app_name)


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    description="Slot-filling travel intake chatbot with LLM phrasing and Airtable persistence.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


def run() -> None:
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
