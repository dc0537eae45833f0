"""Shared fixtures for the travel intake tests."""

import os

# Keep the module-level services offline before the app is imported.
os.environ["AI_PROVIDER"] = "none"
os.environ["AIRTABLE_TOKEN"] = ""
os.environ["AIRTABLE_API_KEY"] = ""
os.environ["AIRTABLE_BASE_ID"] = ""

from unittest.mock import AsyncMock

import pytest

from travelbot.core.config import Settings
from travelbot.models.schemas import AirtableResult
from travelbot.services.chat_agent_service import ChatAgentService
from travelbot.services.openai_service import ReplyComposer
from travelbot.services.store import InMemorySessionStore


@pytest.fixture
def offline_settings() -> Settings:
    return Settings(_env_file=None, ai_provider="none", airtable_token=None, airtable_base_id=None)


@pytest.fixture
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def reply_composer(offline_settings: Settings) -> ReplyComposer:
    return ReplyComposer(offline_settings)


@pytest.fixture
def record_sink() -> AsyncMock:
    sink = AsyncMock()
    sink.upsert_record = AsyncMock(
        return_value=AirtableResult(ok=True, action="create", id="recTEST123")
    )
    return sink


@pytest.fixture
def agent(
    session_store: InMemorySessionStore,
    reply_composer: ReplyComposer,
    record_sink: AsyncMock,
) -> ChatAgentService:
    return ChatAgentService(
        store=session_store,
        reply_composer=reply_composer,
        airtable_service=record_sink,
    )


@pytest.fixture
def complete_lead() -> dict:
    return {
        "full_name": "Hugo Grillon",
        "email": "hugo@gmail.com",
        "departure_city": "Paris",
        "destination": "Rome",
        "start_date": "2025-09-12",
        "end_date": "2025-09-20",
        "n_travelers": 2,
        "budget": 1500.0,
        "interests": "Gastronomie",
    }
