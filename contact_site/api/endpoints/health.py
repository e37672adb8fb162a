from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from contact_site.core.config import Settings, get_settings
from contact_site.db.init_db import verify_store_setup
from contact_site.db.store import MessageStore, get_store

router = APIRouter(prefix="/api")


@router.get("/health")
async def health_check(
    store: MessageStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """
    Health check endpoint.

    Reports whether the message store can be read and the public root exists.
    """
    verification = await run_in_threadpool(verify_store_setup, store, settings.public_root)
    return {
        "status": "ok" if verification["overall_status"] == "PASS" else "degraded",
        "store": verification["store"],
        "public_dir": verification["public_dir"],
    }
