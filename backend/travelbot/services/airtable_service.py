"""Airtable integration service."""

import logging
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

import httpx

from travelbot.core.config import Settings, get_settings
from travelbot.models.schemas import AirtableProbeResponse, AirtableResult
from travelbot.services.recap_service import format_interests

logger = logging.getLogger(__name__)


def escape_formula(value: Any) -> str:
    return str(value or "").replace('"', '\\"')


def _as_number(value: Any) -> float | int | None:
    if isinstance(value, (int, float)):
        return value
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def to_airtable_fields(data: dict[str, Any], user_phrase: str | None = None) -> dict[str, Any]:
    return {
        "Full Name": data.get("full_name") or "",
        "Email": data.get("email") or "",
        "Departure City": data.get("departure_city") or "",
        "Destination": data.get("destination") or "",
        "Start Date": data.get("start_date") or "",
        "End Date": data.get("end_date") or "",
        "Travelers": _as_number(data.get("n_travelers")),
        "Budget (EUR)": _as_number(data.get("budget")),
        "Interests": format_interests(data.get("interests")),
        "Notes": data.get("notes") or "",
        "User Phrase": user_phrase or "",
        "Source": "Chatbot",
        "Created At": datetime.now(timezone.utc).isoformat(),
    }


class AirtableService:
    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.transport = transport

    @property
    def enabled(self) -> bool:
        return self.settings.airtable_enabled

    @property
    def table_url(self) -> str:
        base = self.settings.airtable_api_url.rstrip("/")
        return f"{base}/{self.settings.airtable_base_id}/{quote(self.settings.airtable_table, safe='')}"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.airtable_token}",
            "Content-Type": "application/json",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers=self._headers(),
            timeout=self.settings.airtable_timeout_seconds,
            transport=self.transport,
        )

    def _match_formula(self, data: dict[str, Any]) -> str:
        return (
            f'AND({{Email}}="{escape_formula(data.get("email"))}",'
            f'{{Start Date}}="{escape_formula(data.get("start_date"))}",'
            f'{{Destination}}="{escape_formula(data.get("destination"))}")'
        )

    async def upsert_record(self, data: dict[str, Any], *, user_phrase: str | None = None) -> AirtableResult:
        """Update the lead matching (email, start date, destination), else create it."""
        if not self.enabled:
            return AirtableResult(ok=False, reason="disabled")

        fields = to_airtable_fields(data, user_phrase)
        try:
            async with self._client() as client:
                search = await client.get(
                    self.table_url,
                    params={"maxRecords": 1, "filterByFormula": self._match_formula(data)},
                )
                search.raise_for_status()
                records = search.json().get("records") or []

                if records:
                    action = "update"
                    response = await client.patch(
                        self.table_url,
                        json={"records": [{"id": records[0]["id"], "fields": fields}]},
                    )
                else:
                    action = "create"
                    response = await client.post(
                        self.table_url,
                        json={"records": [{"fields": fields}], "typecast": True},
                    )
                response.raise_for_status()
                saved = (response.json().get("records") or [{}])[0]
        except httpx.HTTPStatusError as exc:
            detail = exc.response.text if exc.response is not None else str(exc)
            logger.error("Airtable upsert failed: HTTP %s %s", exc.response.status_code, detail)
            return AirtableResult(ok=False, reason=f"HTTP {exc.response.status_code}: {detail}")
        except Exception as exc:
            logger.error("Airtable upsert failed: %s", exc)
            return AirtableResult(ok=False, reason=str(exc))

        record_id = saved.get("id")
        logger.info("Airtable %s ok=%s id=%s", action, bool(record_id), record_id)
        return AirtableResult(
            ok=bool(record_id),
            action=action,
            id=str(record_id) if record_id else None,
            reason=None if record_id else "no record returned",
        )

    async def verify_connection(self) -> AirtableProbeResponse:
        if not self.enabled:
            return AirtableProbeResponse(
                ok=False,
                error="Airtable not configured",
                need={
                    "AIRTABLE_TOKEN": bool(self.settings.airtable_token),
                    "AIRTABLE_BASE_ID": bool(self.settings.airtable_base_id),
                    "AIRTABLE_TABLE": bool(self.settings.airtable_table),
                },
            )

        try:
            async with self._client() as client:
                response = await client.get(self.table_url, params={"maxRecords": 1})
            payload = response.json()
            records = payload.get("records") or []
            return AirtableProbeResponse(
                ok=response.is_success,
                status=response.status_code,
                sample=records[0] if records else None,
                error=None if response.is_success else str(payload.get("error") or response.text),
            )
        except Exception as exc:
            logger.error("Airtable probe failed: %s", exc)
            return AirtableProbeResponse(ok=False, error=str(exc))
