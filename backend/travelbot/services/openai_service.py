"""LLM phrasing of dialogue turns, with a deterministic fallback."""

import json
import logging
import re
from typing import Any

import httpx
from openai import AsyncOpenAI

from travelbot.core.config import Settings, get_settings
from travelbot.models.schemas import ComposedReply
from travelbot.services.flow_definitions import FIELD_LABELS_FR, field_label

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 6
DISABLED_PROVIDERS = {"none", "off", "disabled"}
OPENAI_PROVIDERS = {"openai", "openai_compatible"}
ANTHROPIC_PROVIDERS = {"anthropic", "claude"}

RESPONSE_SCHEMA = {
    "name": "ChatbotResponse",
    "schema": {
        "type": "object",
        "properties": {
            "reply": {"type": "string", "description": "Réponse FR naturelle et personnalisée"},
            "suggestions": {"type": "array", "items": {"type": "string"}},
        },
        "required": ["reply", "suggestions"],
        "additionalProperties": False,
    },
    "strict": True,
}

TURN_INSTRUCTIONS = (
    "Objectif: produire UNE réponse courte qui fait avancer la collecte.\n"
    "- Si ask_field n'est pas nul: explique la donnée attendue et propose 3–6 suggestions adaptées.\n"
    "- Si tout est rempli (ask_field=null): félicite et propose de valider ou modifier.\n"
    "- Toujours en français, ton pro et chaleureux. Une seule info à la fois.\n"
)


def fallback_reply_text(ask_field: str | None) -> str:
    if ask_field:
        return f"Noté. Maintenant, j’ai besoin de {field_label(ask_field)}."
    return "Super, j’ai tout ce qu’il faut ! Tapez 'valider' pour confirmer ou 'reset' pour recommencer."


class ReplyComposer:
    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.provider = (self.settings.ai_provider or "openai").strip().lower()
        self.client: AsyncOpenAI | None = None

        if self.provider in DISABLED_PROVIDERS:
            return

        if self.provider in OPENAI_PROVIDERS:
            api_key = self.settings.ai_api_key or self.settings.openai_api_key
            base_url = self.settings.ai_base_url or self.settings.openai_base_url
            if not api_key:
                return

            kwargs: dict[str, Any] = {
                "api_key": api_key,
                "timeout": self.settings.ai_timeout_seconds,
            }
            if base_url:
                kwargs["base_url"] = base_url
            self.client = AsyncOpenAI(**kwargs)

    @property
    def enabled(self) -> bool:
        if self.provider in OPENAI_PROVIDERS:
            return self.client is not None
        if self.provider in ANTHROPIC_PROVIDERS:
            return bool(self.settings.anthropic_api_key or self.settings.ai_api_key)
        return False

    @property
    def model(self) -> str:
        if self.provider in ANTHROPIC_PROVIDERS:
            return self.settings.ai_model or self.settings.anthropic_model
        return self.settings.ai_model or self.settings.openai_model

    def fallback(self, ask_field: str | None, default_suggestions: list[str]) -> ComposedReply:
        return ComposedReply(reply=fallback_reply_text(ask_field), suggestions=list(default_suggestions))

    async def _openai_chat_completion(self, *, system_prompt: str, messages: list[dict[str, str]]) -> str | None:
        if not self.client:
            return None
        completion = await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "system", "content": system_prompt}, *messages],
            response_format={"type": "json_schema", "json_schema": RESPONSE_SCHEMA},
        )
        text = completion.choices[0].message.content
        return text.strip() if text else None

    async def _anthropic_completion(self, *, system_prompt: str, messages: list[dict[str, str]]) -> str | None:
        api_key = self.settings.anthropic_api_key or self.settings.ai_api_key
        if not api_key:
            return None

        user_prompt = "\n\n".join(message["content"] for message in messages)
        user_prompt += '\n\nRéponds uniquement avec un objet JSON {"reply": string, "suggestions": [string]}.'
        async with httpx.AsyncClient(timeout=self.settings.ai_timeout_seconds) as client:
            response = await client.post(
                "https://api.anthropic.com/v1/messages",
                headers={
                    "x-api-key": api_key,
                    "anthropic-version": "2023-06-01",
                    "content-type": "application/json",
                },
                json={
                    "model": self.model,
                    "max_tokens": 400,
                    "system": system_prompt,
                    "messages": [{"role": "user", "content": user_prompt}],
                },
            )
        response.raise_for_status()
        content = response.json().get("content", [])
        if not content:
            return None
        text = content[0].get("text", "")
        return text.strip() if text else None

    def _extract_json_object(self, text: str | None) -> dict[str, Any] | None:
        if not text:
            return None
        raw = text.strip()

        try:
            parsed = json.loads(raw)
            return parsed if isinstance(parsed, dict) else None
        except json.JSONDecodeError:
            pass

        match = re.search(r"\{[\s\S]*\}", raw)
        if not match:
            return None
        try:
            parsed = json.loads(match.group(0))
            return parsed if isinstance(parsed, dict) else None
        except json.JSONDecodeError:
            return None

    async def compose_reply(
        self,
        *,
        known_fields: dict[str, Any],
        ask_field: str | None,
        user_message: str,
        default_suggestions: list[str],
    ) -> ComposedReply:
        if not self.enabled:
            return self.fallback(ask_field, default_suggestions)

        conversation_state = {
            "known_fields": known_fields,
            "ask_field": ask_field,
            "user_message": user_message,
            "default_suggestions": default_suggestions,
            "field_labels_fr": FIELD_LABELS_FR,
        }
        messages = [
            {"role": "user", "content": TURN_INSTRUCTIONS},
            {"role": "user", "content": "STATE_JSON:\n" + json.dumps(conversation_state, ensure_ascii=False, default=str)},
        ]

        try:
            if self.provider in ANTHROPIC_PROVIDERS:
                text = await self._anthropic_completion(
                    system_prompt=self.settings.assistant_persona_prompt,
                    messages=messages,
                )
            else:
                text = await self._openai_chat_completion(
                    system_prompt=self.settings.assistant_persona_prompt,
                    messages=messages,
                )
            parsed = self._extract_json_object(text)
            if not parsed:
                raise ValueError("Malformed reply payload")

            reply = str(parsed.get("reply") or "").strip()
            if not reply:
                raise ValueError("Empty reply")
            suggestions = parsed.get("suggestions")
            if not isinstance(suggestions, list):
                suggestions = []
            cleaned = [str(item).strip() for item in suggestions if str(item).strip()][:MAX_SUGGESTIONS]
            return ComposedReply(reply=reply, suggestions=cleaned)
        except Exception as exc:
            logger.error("Reply generation failed (provider=%s): %s", self.provider, exc)
            return self.fallback(ask_field, default_suggestions)
