"""Session-based slot-filling agent for travel requests."""

from __future__ import annotations

import logging
from typing import Any

from travelbot.models.schemas import AirtableResult, ChatMessageResponse, DialogueState
from travelbot.services.airtable_service import AirtableService
from travelbot.services.entity_extractor import extract_entities, infer_name_from_email
from travelbot.services.field_validator import validate_field
from travelbot.services.flow_definitions import (
    CONFIRM_SUGGESTIONS,
    CONFIRM_WORDS,
    CONTROL_WORDS,
    ESCAPE_PREFIX,
    GREETING_WORDS,
    REQUIRED_FIELDS_ORDER,
    RESET_WORDS,
    USER_PHRASE_MIN_LENGTH,
    field_label,
    find_next_missing,
    is_missing,
)
from travelbot.services.openai_service import ReplyComposer
from travelbot.services.recap_service import build_recap
from travelbot.services.store import ChatSession, InMemorySessionStore
from travelbot.services.suggestion_service import suggest_for_field

logger = logging.getLogger(__name__)

RESET_ACKNOWLEDGEMENT = "On repart de zéro. "
PRE_SUBMIT_CHECK_PREFIX = "Petite vérif avant validation : "

# Fields re-checked before a record is submitted; the rest are free text.
STRICT_FIELDS = ("full_name", "email", "start_date", "end_date", "n_travelers", "budget")


class ChatAgentService:
    def __init__(
        self,
        *,
        store: InMemorySessionStore,
        reply_composer: ReplyComposer,
        airtable_service: AirtableService,
    ) -> None:
        self.store = store
        self.reply_composer = reply_composer
        self.airtable_service = airtable_service

    def dialogue_state(self, session: ChatSession) -> DialogueState:
        if session.current is not None:
            return DialogueState.awaiting
        if find_next_missing(session.data) is None:
            return DialogueState.complete
        return DialogueState.new

    async def process_message(self, *, message: str, session_id: str = "default") -> ChatMessageResponse:
        cleaned = message.strip()
        lowered = cleaned.lower()
        session = self.store.get(session_id)
        self._journal(session, cleaned)

        if lowered in RESET_WORDS:
            return await self._handle_reset(session_id, cleaned)

        state = self.dialogue_state(session)
        logger.info("Chat turn session=%s state=%s current=%s", session_id, state.value, session.current)

        if state is DialogueState.new:
            extracted = extract_entities(cleaned)
            self._fill_missing(session, extracted)
            self._infer_name_from_email(session)
            session.current = find_next_missing(session.data)
            self.store.save(session)
            # A first message that yielded entities is not also an answer to the derived field.
            if lowered in GREETING_WORDS or extracted:
                return await self._prompt_next(session, cleaned)

        if lowered in CONFIRM_WORDS and find_next_missing(session.data) is None:
            return await self._handle_confirmation(session, cleaned)

        if self.dialogue_state(session) is DialogueState.awaiting:
            return await self._handle_field_answer(session, cleaned, session.current)
        return await self._handle_complete(session, cleaned)

    def _journal(self, session: ChatSession, message: str) -> None:
        session.all_messages.append(message)
        if session.user_phrase:
            return
        if len(message) >= USER_PHRASE_MIN_LENGTH and message.lower() not in CONTROL_WORDS:
            session.user_phrase = message

    def _fill_missing(self, session: ChatSession, extracted: dict[str, Any]) -> None:
        for key, value in extracted.items():
            if key in REQUIRED_FIELDS_ORDER and is_missing(session.data.get(key)):
                session.data[key] = value

    def _infer_name_from_email(self, session: ChatSession) -> None:
        # Only before a field is solicited; an asked-for name always goes through the validator.
        if is_missing(session.data.get("full_name")) and session.data.get("email"):
            guess = infer_name_from_email(session.data["email"])
            if guess:
                session.data["full_name"] = guess

    async def _handle_reset(self, session_id: str, message: str) -> ChatMessageResponse:
        session = self.store.reset(session_id)
        session.current = find_next_missing(session.data)
        return await self._prompt_next(session, message, prefix=RESET_ACKNOWLEDGEMENT)

    async def _handle_field_answer(self, session: ChatSession, message: str, current: str) -> ChatMessageResponse:
        if message.lower().startswith(ESCAPE_PREFIX):
            return self._response(
                f"D’accord. Indiquez {field_label(current)}.",
                ask_field=current,
                suggestions=[],
            )

        extracted = extract_entities(message)
        if current not in STRICT_FIELDS and self._repeats_known_value(session, message, extracted):
            return await self._prompt_next(session, message)

        self._fill_missing(session, extracted)

        if is_missing(session.data.get(current)):
            value, error = validate_field(current, message, session.data)
            if error:
                logger.info("Rejected %s for session=%s: %s", current, session.session_id, error)
                return self._response(
                    error,
                    ask_field=current,
                    suggestions=suggest_for_field(current, session.data),
                )
            session.data[current] = value

        session.current = find_next_missing(session.data)
        self.store.save(session)
        return await self._prompt_next(session, message)

    async def _handle_confirmation(self, session: ChatSession, message: str) -> ChatMessageResponse:
        failure = self._recheck_before_submit(session.data)
        if failure:
            field, error = failure
            session.data.pop(field, None)
            session.current = field
            self.store.save(session)
            return self._response(
                PRE_SUBMIT_CHECK_PREFIX + error,
                ask_field=field,
                suggestions=suggest_for_field(field, session.data),
            )

        session.current = None
        self.store.save(session)
        recap = build_recap(session.data, session.user_phrase)

        try:
            airtable = await self.airtable_service.upsert_record(
                dict(session.data),
                user_phrase=session.user_phrase,
            )
        except Exception as exc:
            logger.exception("Record upsert raised for session=%s", session.session_id)
            airtable = AirtableResult(ok=False, reason=str(exc))

        composed = await self.reply_composer.compose_reply(
            known_fields=dict(session.data),
            ask_field=None,
            user_message=message,
            default_suggestions=CONFIRM_SUGGESTIONS,
        )
        return self._response(
            f"{composed.reply}\n\n{recap}",
            ask_field=None,
            suggestions=composed.suggestions or list(CONFIRM_SUGGESTIONS),
            recap=recap,
            airtable=airtable,
        )

    async def _handle_complete(self, session: ChatSession, message: str) -> ChatMessageResponse:
        recap = build_recap(session.data, session.user_phrase)
        composed = await self.reply_composer.compose_reply(
            known_fields=dict(session.data),
            ask_field=None,
            user_message=message,
            default_suggestions=CONFIRM_SUGGESTIONS,
        )
        return self._response(
            f"{composed.reply}\n\n{recap}",
            ask_field=None,
            suggestions=composed.suggestions or list(CONFIRM_SUGGESTIONS),
            recap=recap,
        )

    async def _prompt_next(self, session: ChatSession, message: str, *, prefix: str = "") -> ChatMessageResponse:
        if session.current is None:
            return await self._handle_complete(session, message)

        defaults = suggest_for_field(session.current, session.data)
        composed = await self.reply_composer.compose_reply(
            known_fields=dict(session.data),
            ask_field=session.current,
            user_message=message,
            default_suggestions=defaults,
        )
        return self._response(
            prefix + composed.reply,
            ask_field=session.current,
            suggestions=composed.suggestions or defaults,
        )

    def _repeats_known_value(self, session: ChatSession, message: str, extracted: dict[str, Any]) -> bool:
        """True when the whole utterance is an extracted value already stored under that key."""
        lowered = message.lower()
        for key, value in extracted.items():
            stored = session.data.get(key)
            if is_missing(stored) or str(value).lower() != lowered:
                continue
            if str(stored).lower() == lowered:
                return True
        return False

    def _recheck_before_submit(self, data: dict[str, Any]) -> tuple[str, str] | None:
        normalized: dict[str, Any] = {}
        for field in STRICT_FIELDS:
            value, error = validate_field(field, data.get(field), data)
            if error:
                return field, error
            normalized[field] = value
        data.update(normalized)
        return None

    def _response(
        self,
        reply: str,
        *,
        ask_field: str | None,
        suggestions: list[str] | None = None,
        recap: str | None = None,
        airtable: AirtableResult | None = None,
    ) -> ChatMessageResponse:
        payload: dict[str, Any] = {
            "reply": reply,
            "ask_field": ask_field,
            "suggestions": list(suggestions or []),
        }
        if recap is not None:
            payload["recap"] = recap
        if airtable is not None:
            payload["airtable"] = airtable
        return ChatMessageResponse(**payload)
