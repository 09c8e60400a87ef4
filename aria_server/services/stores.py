from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from threading import RLock
from typing import Dict, List, Optional
import logging

from aria_server.models.schemas import ConversationMessage


UTC = timezone.utc

logger = logging.getLogger(__name__)


def now_utc() -> datetime:
	return datetime.now(UTC)


@dataclass
class Conversation:
	key: str
	messages: List[ConversationMessage] = field(default_factory=list)

	def append(self, message: ConversationMessage, max_messages: int) -> None:
		self.messages.append(message)
		overflow = len(self.messages) - max_messages
		if overflow > 0:
			del self.messages[:overflow]

	@property
	def last_activity(self) -> Optional[datetime]:
		if not self.messages:
			return None
		return self.messages[-1].timestamp


class ConversationStore:
	"""Per-key message history, capped in length and swept by age."""

	def __init__(self, max_messages: int = 20) -> None:
		self._lock = RLock()
		self._data: Dict[str, Conversation] = {}
		self.max_messages = max_messages

	def get(self, key: str) -> List[ConversationMessage]:
		with self._lock:
			conv = self._data.get(key)
			return list(conv.messages) if conv is not None else []

	def append(self, key: str, message: ConversationMessage) -> None:
		with self._lock:
			conv = self._data.get(key)
			if conv is None:
				conv = Conversation(key=key)
				self._data[key] = conv
			conv.append(message, self.max_messages)

	def sweep(self, retention: timedelta, now: Optional[datetime] = None) -> None:
		cutoff = (now or now_utc()) - retention
		with self._lock:
			to_delete = [
				key for key, conv in self._data.items()
				if conv.last_activity is None or conv.last_activity < cutoff
			]
			for key in to_delete:
				self._data.pop(key, None)
		if to_delete:
			logger.debug("Evicted %d stale conversations", len(to_delete))

	def size(self) -> int:
		with self._lock:
			return len(self._data)

	def clear(self) -> None:
		with self._lock:
			self._data.clear()
