from __future__ import annotations

from typing import Any, Literal, Optional
from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict
from datetime import datetime


class ChatRequest(BaseModel):
	message: Any = None
	session_id: Optional[str] = Field(default=None, alias="sessionId")

	model_config = ConfigDict(populate_by_name=True)

	@field_validator("session_id", mode="before")
	@classmethod
	def _stringify_session_id(cls, value: Any) -> Optional[str]:
		if value is None or value == "":
			return None
		return value if isinstance(value, str) else str(value)


class ChatResponse(BaseModel):
	reply: str


class ErrorResponse(BaseModel):
	error: str


class HealthResponse(BaseModel):
	status: str = "ok"
	version: str
	conversations: int
	static_dir: str = Field(..., alias="staticDir")

	model_config = ConfigDict(populate_by_name=True)


class ConversationMessage(BaseModel):
	role: Literal["user", "assistant", "system"]
	content: str
	timestamp: datetime

	model_config = ConfigDict(frozen=True)
