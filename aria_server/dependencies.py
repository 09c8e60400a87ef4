from __future__ import annotations

from typing import Any, Dict
import json

from fastapi import Request

from aria_server.config import Settings
from aria_server.errors import PayloadTooLarge
from aria_server.models.schemas import ChatRequest
from aria_server.services.completion import CompletionClient
from aria_server.services.stores import ConversationStore


def get_settings(request: Request) -> Settings:
	return request.app.state.settings


def get_store(request: Request) -> ConversationStore:
	return request.app.state.conversation_store


def get_completion_client(request: Request) -> CompletionClient:
	return request.app.state.completion_client


def _json_object(raw: bytes, content_type: str) -> Dict[str, Any]:
	"""Decode a JSON object body; anything else reads as an empty body."""
	if not raw or "json" not in content_type.lower():
		return {}
	try:
		payload = json.loads(raw)
	except ValueError:
		return {}
	return payload if isinstance(payload, dict) else {}


async def read_chat_request(request: Request) -> ChatRequest:
	limit = request.app.state.settings.MAX_BODY_BYTES
	declared = request.headers.get("content-length")
	if declared is not None and declared.isdigit() and int(declared) > limit:
		raise PayloadTooLarge(f"Request body exceeds {limit} bytes")

	chunks = []
	received = 0
	async for chunk in request.stream():
		received += len(chunk)
		if received > limit:
			raise PayloadTooLarge(f"Request body exceeds {limit} bytes")
		chunks.append(chunk)

	payload = _json_object(b"".join(chunks), request.headers.get("content-type", ""))
	return ChatRequest.model_validate(payload)
