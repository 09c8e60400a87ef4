from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional
import os

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response
from starlette.types import Scope

from aria_server.config import Settings
from aria_server.dependencies import get_settings, get_store
from aria_server.errors import NotFound
from aria_server.models.schemas import HealthResponse
from aria_server.services.stores import ConversationStore


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health(
	store: ConversationStore = Depends(get_store),
	settings: Settings = Depends(get_settings),
) -> HealthResponse:
	return HealthResponse(
		status="ok",
		version=settings.APP_VERSION,
		conversations=store.size(),
		static_dir=str(settings.STATIC_DIR),
	)


def first_existing(candidates: Iterable[Path]) -> Optional[Path]:
	for candidate in candidates:
		if candidate.is_file():
			return candidate
	return None


def index_candidates(settings: Settings) -> List[Path]:
	return [settings.STATIC_DIR / "index.html", settings.ROOT_INDEX]


class SiteFiles(StaticFiles):
	"""Static assets with a single-page-app fallback.

	Unmatched GET paths get the first existing index document, else ``NotFound``.
	"""

	def __init__(self, directory: Path, fallbacks: List[Path]) -> None:
		super().__init__(directory=directory, check_dir=False)
		self.fallbacks = fallbacks

	async def check_config(self) -> None:
		# a missing site directory still leaves the index fallbacks
		if os.path.isdir(self.directory):
			await super().check_config()

	async def get_response(self, path: str, scope: Scope) -> Response:
		try:
			return await super().get_response(path, scope)
		except StarletteHTTPException as exc:
			if exc.status_code != 404:
				raise
		except (OSError, ValueError):
			pass
		target = first_existing(self.fallbacks)
		if target is None:
			raise NotFound()
		return FileResponse(target)


def build_site_files(settings: Settings) -> SiteFiles:
	return SiteFiles(directory=settings.STATIC_DIR, fallbacks=index_candidates(settings))
