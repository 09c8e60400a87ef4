from __future__ import annotations

from contextlib import suppress
from datetime import datetime, timedelta
from typing import Callable, Optional
import asyncio
import logging

from aria_server.services.stores import ConversationStore, now_utc


logger = logging.getLogger(__name__)


class Janitor:
	"""Periodically evicts conversations idle for longer than ``retention``."""

	def __init__(
		self,
		store: ConversationStore,
		retention: timedelta,
		interval: float,
		clock: Callable[[], datetime] = now_utc,
	) -> None:
		self.store = store
		self.retention = retention
		self.interval = interval
		self._clock = clock
		self._task: Optional[asyncio.Task] = None

	@property
	def running(self) -> bool:
		return self._task is not None and not self._task.done()

	def run_once(self, now: Optional[datetime] = None) -> None:
		try:
			self.store.sweep(self.retention, now or self._clock())
		except Exception:
			logger.exception("Conversation sweep failed")

	async def _purge_loop(self) -> None:
		while True:
			await asyncio.sleep(self.interval)
			self.run_once()

	def start(self) -> asyncio.Task:
		if self._task is None or self._task.done():
			self._task = asyncio.create_task(self._purge_loop())
		return self._task

	async def stop(self) -> None:
		task, self._task = self._task, None
		if task is None:
			return
		task.cancel()
		with suppress(asyncio.CancelledError):
			await task
