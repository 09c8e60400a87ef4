from __future__ import annotations

from typing import Dict, List, Sequence
import json

from aria_server.models.schemas import ConversationMessage


ASSISTANT_NAME = "Aria"
CONTEXT_WINDOW = 6

FIRST_MESSAGE_DIRECTIVE = 'Start with "Kia ora!" for first message only.'
STYLE_DIRECTIVES = (
	"Be helpful, concise, and Kiwi-friendly.\n"
	"Use realistic flight/pricing examples when asked."
)


def recent_turns(history: Sequence[ConversationMessage], window: int = CONTEXT_WINDOW) -> List[Dict[str, str]]:
	"""Role/content pairs for the trailing ``window`` messages, oldest first."""
	if window <= 0:
		return []
	return [{"role": m.role, "content": m.content} for m in list(history)[-window:]]


def compose_system_prompt(
	user_message: str,
	history: Sequence[ConversationMessage],
	*,
	assistant_name: str = ASSISTANT_NAME,
	window: int = CONTEXT_WINDOW,
) -> str:
	"""Render the system instruction sent ahead of the conversational turns.

	An empty ``history`` marks the opening message of a conversation and adds the
	greeting directive. The context block carries role and content only.
	"""
	context = recent_turns(history, window)
	lines = [
		f"You are {assistant_name}, an expert travel assistant.",
		FIRST_MESSAGE_DIRECTIVE if not context else "",
		STYLE_DIRECTIVES,
		"",
		"Conversation context (last messages):",
		json.dumps(context, indent=2, ensure_ascii=False),
		"",
		"User message:",
		user_message,
	]
	return "\n".join(lines)
