from fastapi import FastAPI
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional
import logging

from aria_server.config import Settings, settings as default_settings
from aria_server.errors import register_error_handlers
from aria_server.routers.chat import router as chat_router
from aria_server.routers.site import build_site_files, router as site_router
from aria_server.services.completion import CompletionClient
from aria_server.services.janitor import Janitor
from aria_server.services.stores import ConversationStore


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
	janitor: Janitor = app.state.janitor
	janitor.start()
	logger.info("Serving static files from: %s", app.state.settings.STATIC_DIR)
	try:
		yield
	finally:
		await janitor.stop()
		await app.state.completion_client.aclose()


def create_app(
	settings: Optional[Settings] = None,
	completion_client: Optional[CompletionClient] = None,
) -> FastAPI:
	settings = settings or default_settings
	app = FastAPI(title="Aria Chat Server", version=settings.APP_VERSION, lifespan=lifespan)

	store = ConversationStore(max_messages=settings.MAX_HISTORY_MESSAGES)
	app.state.settings = settings
	app.state.conversation_store = store
	app.state.completion_client = completion_client or CompletionClient(settings)
	app.state.janitor = Janitor(
		store,
		retention=timedelta(seconds=settings.CONVERSATION_TTL_SECONDS),
		interval=settings.PURGE_INTERVAL_SECONDS,
	)

	register_error_handlers(app)
	app.include_router(chat_router, prefix="/chat", tags=["chat"])
	app.include_router(site_router, tags=["site"])
	# catch-all last
	app.mount("/", build_site_files(settings), name="site")
	return app


app = create_app()


def run() -> None:
	import uvicorn

	logging.basicConfig(
		level=default_settings.LOG_LEVEL.upper(),
		format="[%(asctime)s] %(levelname)s - %(message)s",
	)
	logger.info("Server listening on port %s", default_settings.PORT)
	uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)


if __name__ == "__main__":
	run()
