import json

from aria_server.models.schemas import ConversationMessage
from aria_server.services.prompt import FIRST_MESSAGE_DIRECTIVE, compose_system_prompt, recent_turns
from aria_server.services.stores import now_utc


def _history(n):
	roles = ["user", "assistant"]
	return [
		ConversationMessage(role=roles[i % 2], content=f"turn {i}", timestamp=now_utc())
		for i in range(n)
	]


def test_first_message_includes_greeting():
	prompt = compose_system_prompt("Kia ora, any deals to Sydney?", [])
	assert prompt.startswith("You are Aria, an expert travel assistant.")
	assert FIRST_MESSAGE_DIRECTIVE in prompt


def test_follow_up_never_includes_greeting():
	for n in (1, 2, 6, 13):
		assert FIRST_MESSAGE_DIRECTIVE not in compose_system_prompt("next", _history(n))


def test_context_is_last_six_without_timestamps():
	prompt = compose_system_prompt("what about baggage?", _history(9))
	context_block = prompt.split("Conversation context (last messages):\n", 1)[1].split("\n\nUser message:", 1)[0]
	context = json.loads(context_block)
	assert [c["content"] for c in context] == [f"turn {i}" for i in range(3, 9)]
	assert all(set(c) == {"role", "content"} for c in context)


def test_user_message_is_final_section():
	prompt = compose_system_prompt("Auckland to Wellington tomorrow?", _history(2))
	assert prompt.endswith("User message:\nAuckland to Wellington tomorrow?")
	assert "Be helpful, concise, and Kiwi-friendly." in prompt


def test_compose_is_deterministic():
	history = _history(4)
	assert compose_system_prompt("x", history) == compose_system_prompt("x", history)


def test_recent_turns_window():
	assert recent_turns([], 6) == []
	assert len(recent_turns(_history(3), 6)) == 3
	assert recent_turns(_history(8), 6)[0] == {"role": "user", "content": "turn 2"}
