"""
Tests for LLM reply composition.

These tests verify that:
1. A disabled provider always yields the deterministic fallback
2. A well-formed structured reply is used, with suggestions capped at six
3. Malformed, empty or failing completions degrade to the fallback
4. JSON embedded in surrounding prose is recovered
"""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from travelbot.core.config import Settings
from travelbot.services.openai_service import ReplyComposer, fallback_reply_text

DEFAULTS = ["Paris", "Lyon", "Autre…"]


def openai_settings(**overrides) -> Settings:
    values = {"ai_provider": "openai", "openai_api_key": "test-key", "ai_api_key": None}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def mock_completion(content):
    completion = MagicMock()
    completion.choices = [MagicMock(message=MagicMock(content=content))]
    return completion


def composer_returning(content) -> ReplyComposer:
    composer = ReplyComposer(openai_settings())
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=mock_completion(content))
    composer.client = client
    return composer


async def compose(composer, ask_field="departure_city"):
    return await composer.compose_reply(
        known_fields={"full_name": "Hugo Grillon"},
        ask_field=ask_field,
        user_message="Hugo Grillon",
        default_suggestions=DEFAULTS,
    )


class TestFallback:
    def test_fallback_text_names_the_field(self):
        assert fallback_reply_text("email") == "Noté. Maintenant, j’ai besoin de votre adresse e-mail."

    def test_fallback_text_when_complete(self):
        assert "'valider'" in fallback_reply_text(None)

    @pytest.mark.asyncio
    async def test_disabled_provider_uses_fallback(self, reply_composer):
        assert reply_composer.enabled is False

        result = await compose(reply_composer)

        assert result.reply == "Noté. Maintenant, j’ai besoin de votre ville de départ."
        assert result.suggestions == DEFAULTS

    def test_openai_without_key_is_disabled(self):
        composer = ReplyComposer(openai_settings(openai_api_key=None))
        assert composer.enabled is False

    def test_model_override(self):
        assert ReplyComposer(openai_settings()).model == "gpt-5-mini"
        assert ReplyComposer(openai_settings(ai_model="gpt-4o-mini")).model == "gpt-4o-mini"


class TestOpenAICompletion:
    @pytest.mark.asyncio
    async def test_structured_reply_is_used(self):
        composer = composer_returning(
            json.dumps({"reply": "Merci Hugo ! D’où partez-vous ?", "suggestions": ["Paris", "Nice"]})
        )

        result = await compose(composer)

        assert result.reply == "Merci Hugo ! D’où partez-vous ?"
        assert result.suggestions == ["Paris", "Nice"]
        call = composer.client.chat.completions.create.await_args
        assert call.kwargs["response_format"]["type"] == "json_schema"
        assert call.kwargs["messages"][0]["role"] == "system"
        assert "STATE_JSON" in call.kwargs["messages"][-1]["content"]

    @pytest.mark.asyncio
    async def test_suggestions_are_capped(self):
        composer = composer_returning(
            json.dumps({"reply": "Choisissez", "suggestions": [str(n) for n in range(10)] + [" "]})
        )

        result = await compose(composer)

        assert result.suggestions == ["0", "1", "2", "3", "4", "5"]

    @pytest.mark.asyncio
    async def test_missing_suggestions_become_empty(self):
        composer = composer_returning(json.dumps({"reply": "Ok", "suggestions": "Paris"}))

        result = await compose(composer)

        assert result.reply == "Ok"
        assert result.suggestions == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "content",
        [
            "pas du json",
            json.dumps({"reply": "   ", "suggestions": ["x"]}),
            json.dumps(["reply"]),
            "",
            None,
        ],
    )
    async def test_unusable_output_falls_back(self, content):
        composer = composer_returning(content)

        result = await compose(composer)

        assert result.reply == fallback_reply_text("departure_city")
        assert result.suggestions == DEFAULTS

    @pytest.mark.asyncio
    async def test_provider_error_falls_back(self):
        composer = composer_returning("{}")
        composer.client.chat.completions.create = AsyncMock(side_effect=TimeoutError("slow"))

        result = await compose(composer, ask_field=None)

        assert result.reply == fallback_reply_text(None)


class TestAnthropicCompletion:
    @pytest.mark.asyncio
    async def test_json_inside_prose_is_recovered(self):
        composer = ReplyComposer(
            Settings(_env_file=None, ai_provider="anthropic", anthropic_api_key="test-key", ai_api_key=None)
        )
        assert composer.enabled is True

        text = 'Voici ma réponse : {"reply": "Où allez-vous ?", "suggestions": ["Rome"]} Bonne journée.'
        with patch.object(composer, "_anthropic_completion", AsyncMock(return_value=text)) as completion:
            result = await compose(composer, ask_field="destination")

        completion.assert_awaited_once()
        assert result.reply == "Où allez-vous ?"
        assert result.suggestions == ["Rome"]


class TestJsonSalvage:
    def test_extract_json_object(self, reply_composer):
        assert reply_composer._extract_json_object('{"reply": "a"}') == {"reply": "a"}
        assert reply_composer._extract_json_object('texte {"reply": "b"} fin') == {"reply": "b"}
        assert reply_composer._extract_json_object("{cassé") is None
        assert reply_composer._extract_json_object(None) is None
