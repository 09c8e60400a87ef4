from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


CONFIGURATION_APOLOGY = "Server is not configured with an OpenAI API key."
UPSTREAM_APOLOGY = (
	"I'm having trouble connecting to our AI systems right now. "
	"Try again in a moment or visit the official site for bookings."
)


class ChatServerError(Exception):
	"""Request-level failure rendered as a JSON body under ``response_key``."""

	status_code = 500
	response_key = "error"
	default_message = "Internal server error"

	def __init__(self, message: str | None = None) -> None:
		self.message = message or self.default_message
		super().__init__(self.message)


class MissingInput(ChatServerError):
	status_code = 400
	default_message = "Missing message in request body"


class PayloadTooLarge(ChatServerError):
	status_code = 413
	default_message = "Request body too large"


class NotFound(ChatServerError):
	status_code = 404
	default_message = "Not found"


class ConfigurationError(ChatServerError):
	response_key = "reply"
	default_message = CONFIGURATION_APOLOGY


class UpstreamFailure(ChatServerError):
	response_key = "reply"
	default_message = UPSTREAM_APOLOGY


async def _handle_chat_server_error(request: Request, exc: ChatServerError) -> JSONResponse:
	return JSONResponse(status_code=exc.status_code, content={exc.response_key: exc.message})


def register_error_handlers(app: FastAPI) -> None:
	app.add_exception_handler(ChatServerError, _handle_chat_server_error)  # type: ignore[arg-type]
