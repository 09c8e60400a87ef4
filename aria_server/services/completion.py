from __future__ import annotations

from typing import Dict, List, Optional
import httpx
from langchain_openai import ChatOpenAI
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from aria_server.config import Settings


EMPTY_REPLY_FALLBACK = "Sorry, I couldn't compose a reply."


def to_lc_messages(messages: List[Dict[str, str]]) -> List[BaseMessage]:
	lc_messages: List[BaseMessage] = []
	for m in messages:
		role = m.get("role")
		content = m.get("content", "")
		if role == "system":
			lc_messages.append(SystemMessage(content=content))
		elif role == "assistant":
			lc_messages.append(AIMessage(content=content))
		else:
			lc_messages.append(HumanMessage(content=content))
	return lc_messages


class CompletionClient:
	"""Single-shot chat completion against an OpenAI-compatible endpoint.

	The underlying ``ChatOpenAI`` model and its HTTP client are built on first use,
	so an unconfigured server never constructs them.
	"""

	def __init__(self, settings: Settings) -> None:
		self._settings = settings
		self._http_client: Optional[httpx.AsyncClient] = None
		self._llm: Optional[ChatOpenAI] = None

	def _get_llm(self) -> ChatOpenAI:
		if self._llm is None:
			self._http_client = httpx.AsyncClient(timeout=httpx.Timeout(self._settings.OPENAI_TIMEOUT_SECONDS))
			self._llm = ChatOpenAI(
				openai_api_key=self._settings.OPENAI_API_KEY,
				openai_api_base=self._settings.OPENAI_BASE_URL,
				model=self._settings.MODEL_NAME,
				max_tokens=self._settings.MAX_TOKENS,
				temperature=self._settings.TEMPERATURE,
				max_retries=0,
				http_async_client=self._http_client,
			)
		return self._llm

	async def complete(self, messages: List[Dict[str, str]]) -> str:
		result = await self._get_llm().ainvoke(to_lc_messages(messages))
		content = getattr(result, "content", None)
		if not isinstance(content, str) or not content:
			return EMPTY_REPLY_FALLBACK
		return content

	async def aclose(self) -> None:
		if self._http_client is not None:
			await self._http_client.aclose()
		self._http_client = None
		self._llm = None
