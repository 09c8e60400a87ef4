from __future__ import annotations

from typing import Any, Optional
import logging

from fastapi import APIRouter, Depends, Request

from aria_server.config import Settings
from aria_server.dependencies import get_completion_client, get_settings, get_store, read_chat_request
from aria_server.errors import ConfigurationError, MissingInput, UpstreamFailure
from aria_server.models.schemas import ChatRequest, ChatResponse, ConversationMessage, ErrorResponse
from aria_server.services.completion import CompletionClient
from aria_server.services.prompt import compose_system_prompt, recent_turns
from aria_server.services.stores import ConversationStore, now_utc


ANONYMOUS_KEY = "anon"

logger = logging.getLogger(__name__)

router = APIRouter()


def _coerce_message(value: Any) -> str:
	if not value:
		return ""
	return value if isinstance(value, str) else str(value)


def conversation_key(request: Request, session_id: Optional[str]) -> str:
	if session_id:
		return session_id
	if request.client is not None and request.client.host:
		return request.client.host
	return ANONYMOUS_KEY


@router.post(
	"",
	response_model=ChatResponse,
	responses={400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}, 500: {"model": ChatResponse}},
)
async def post_chat(
	request: Request,
	body: ChatRequest = Depends(read_chat_request),
	store: ConversationStore = Depends(get_store),
	settings: Settings = Depends(get_settings),
	client: CompletionClient = Depends(get_completion_client),
):
	user_message = _coerce_message(body.message)
	if not user_message:
		raise MissingInput()

	key = conversation_key(request, body.session_id)
	previous = store.get(key)
	store.append(key, ConversationMessage(role="user", content=user_message, timestamp=now_utc()))

	system_prompt = compose_system_prompt(
		user_message,
		previous,
		assistant_name=settings.ASSISTANT_NAME,
		window=settings.CONTEXT_MESSAGES,
	)
	messages = [{"role": "system", "content": system_prompt}]
	messages.extend(recent_turns(store.get(key), settings.CONTEXT_MESSAGES))

	if not settings.OPENAI_API_KEY:
		logger.error("OPENAI_API_KEY missing in environment")
		raise ConfigurationError()

	try:
		reply = await client.complete(messages)
	except Exception as exc:
		logger.exception("Completion request failed for conversation %s", key)
		raise UpstreamFailure() from exc

	store.append(key, ConversationMessage(role="assistant", content=reply, timestamp=now_utc()))
	return ChatResponse(reply=reply)
