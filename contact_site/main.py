#run it with uvicorn contact_site.main:app --reload  (or the contact-site console script)
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from dotenv import load_dotenv
import logging
import uvicorn

from contact_site.api.api_router import api_router
from contact_site.core.config import Settings, get_settings
from contact_site.core.errors import SiteError
from contact_site.db.init_db import initialize_store
from contact_site.db.store import JsonFileMessageStore, MessageStore

# Load environment variables from .env file
load_dotenv()

# Set up logging
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def site_error_handler(request: Request, exc: SiteError):
    return PlainTextResponse(exc.message, status_code=exc.status_code)


def create_app(settings: Settings = None, store: MessageStore = None) -> FastAPI:
    """
    Build the site application.

    Args:
        settings: Overrides the environment-derived settings
        store: Message store to use; defaults to the JSON file from settings
    """
    settings = settings or get_settings()
    store = store or JsonFileMessageStore(settings.message_store)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize the message store on application startup"""
        logger.info(f"🚀 Serving {settings.public_root} at http://{settings.host}:{settings.port}")
        if initialize_store(store):
            logger.info(f"📫 Messages will be stored in {store.describe()}")
        else:
            logger.warning("⚠️ Message store is not ready, submissions will fail until it is")
        yield

    app = FastAPI(title="Contact Site Backend", version="1.0.0", lifespan=lifespan)
    app.state.message_store = store
    app.state.settings = settings
    app.dependency_overrides[get_settings] = lambda: settings

    # CORS setup
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(SiteError, site_error_handler)

    app.include_router(api_router)
    return app


app = create_app()


def run():
    """Console entry point: serve the app on the configured host and port"""
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
