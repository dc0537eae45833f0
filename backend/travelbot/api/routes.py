"""API routes for the travel intake chat and diagnostics."""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import HTMLResponse, JSONResponse

from travelbot.data.pages import INDEX_HTML, PLAYGROUND_HTML
from travelbot.models.schemas import ChatMessageRequest, ChatMessageResponse, HealthResponse
from travelbot.services.airtable_service import AirtableService
from travelbot.services.chat_agent_service import ChatAgentService
from travelbot.services.openai_service import ReplyComposer
from travelbot.services.store import get_store

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 4000

router = APIRouter()
store = get_store()
reply_composer = ReplyComposer()
airtable_service = AirtableService()
chat_agent_service = ChatAgentService(
    store=store,
    reply_composer=reply_composer,
    airtable_service=airtable_service,
)


def get_chat_agent_service() -> ChatAgentService:
    return chat_agent_service


def get_airtable_service() -> AirtableService:
    return airtable_service


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def index() -> str:
    return INDEX_HTML


@router.get("/playground", response_class=HTMLResponse, include_in_schema=False)
def playground() -> str:
    return PLAYGROUND_HTML


@router.get("/health", response_model=HealthResponse, tags=["health"])
def health_check() -> HealthResponse:
    return HealthResponse(ok=True)


@router.get("/airtable/test", tags=["health"])
async def airtable_probe(service: AirtableService = Depends(get_airtable_service)) -> JSONResponse:
    result = await service.verify_connection()
    if result.need is not None:
        status_code = status.HTTP_400_BAD_REQUEST
    elif result.status is not None:
        status_code = result.status
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR if not result.ok else status.HTTP_200_OK
    return JSONResponse(status_code=status_code, content=result.model_dump(exclude_none=True))


@router.post(
    "/chat",
    response_model=ChatMessageResponse,
    response_model_exclude_unset=True,
    tags=["chat"],
)
async def chat_message(
    payload: ChatMessageRequest,
    service: ChatAgentService = Depends(get_chat_agent_service),
) -> ChatMessageResponse | JSONResponse:
    message = (payload.message or "").strip()
    if not message:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "message is required"},
        )
    if len(message) > MAX_MESSAGE_LENGTH:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "message is too long"},
        )

    try:
        return await service.process_message(message=message, session_id=payload.session_id)
    except Exception:
        logger.exception("Unhandled error while processing chat turn for session=%s", payload.session_id)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "server_error"},
        )
