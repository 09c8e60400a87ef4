from datetime import timedelta

from aria_server.models.schemas import ConversationMessage
from aria_server.services.stores import ConversationStore, now_utc


def _msg(content, role="user", ts=None):
	return ConversationMessage(role=role, content=content, timestamp=ts or now_utc())


def test_get_missing_key_is_empty():
	store = ConversationStore()
	assert store.get("nobody") == []
	assert store.size() == 0


def test_append_keeps_most_recent_twenty_in_order():
	store = ConversationStore(max_messages=20)
	for n in (1, 7, 20, 21, 45):
		store.clear()
		for i in range(n):
			store.append("k", _msg(str(i)))
		history = store.get("k")
		assert len(history) == min(n, 20)
		assert [m.content for m in history] == [str(i) for i in range(max(0, n - 20), n)]


def test_get_returns_a_copy():
	store = ConversationStore()
	store.append("k", _msg("hello"))
	store.get("k").clear()
	assert len(store.get("k")) == 1


def test_sweep_retention_boundaries():
	store = ConversationStore()
	last = now_utc()
	store.append("k", _msg("hi", ts=last))

	store.sweep(timedelta(hours=24), now=last + timedelta(hours=1))
	assert store.size() == 1

	store.sweep(timedelta(hours=24), now=last + timedelta(hours=25))
	assert store.size() == 0


def test_sweep_uses_last_message_timestamp():
	store = ConversationStore()
	start = now_utc() - timedelta(hours=30)
	store.append("k", _msg("old", ts=start))
	store.append("k", _msg("recent", role="assistant", ts=start + timedelta(hours=29)))

	store.sweep(timedelta(hours=24), now=start + timedelta(hours=30))
	assert store.get("k")[-1].content == "recent"


def test_sweep_only_evicts_stale_sessions():
	store = ConversationStore()
	now = now_utc()
	store.append("stale", _msg("a", ts=now - timedelta(days=2)))
	store.append("fresh", _msg("b", ts=now - timedelta(minutes=5)))

	store.sweep(timedelta(hours=24), now=now)
	assert store.size() == 1
	assert store.get("stale") == []
	assert store.get("fresh")[0].content == "b"
