#!/usr/bin/env python3
"""
Store initialization module for the contact site backend.
This module makes sure the message store exists when the backend starts,
and reports on the store and the public root for the health endpoint.
"""

import logging
from pathlib import Path

from contact_site.db.store import MessageStore

# Set up logger
logger = logging.getLogger(__name__)


def initialize_store(store: MessageStore) -> bool:
    """
    Create the message store if it doesn't exist yet.
    This function is safe to call multiple times - it only creates what's missing.

    Returns:
        bool: True if the store is ready, False otherwise
    """
    logger.info(f"🚀 Initializing message store: {store.describe()}")
    try:
        if store.ensure_exists():
            logger.info("✅ Message store created")
        else:
            logger.info("✅ Message store already exists")
        return True
    except OSError as e:
        logger.error(f"❌ Failed to initialize message store: {str(e)}")
        return False


def verify_store_setup(store: MessageStore, public_root: Path) -> dict:
    """
    Verify that the store can be read and the public root is a directory.

    Returns:
        dict: Verification results with an ``overall_status`` of PASS or FAIL
    """
    results = {
        "store": {"location": store.describe()},
        "public_dir": {"location": str(public_root)},
        "overall_status": "unknown",
    }
    all_good = True

    try:
        results["store"]["message_count"] = len(store.list())
        results["store"]["status"] = "OK"
    except Exception as e:
        logger.error(f"⚠️ Message store verification failed - {str(e)}")
        results["store"]["status"] = "ERROR"
        results["store"]["error"] = str(e)
        all_good = False

    if public_root.is_dir():
        results["public_dir"]["status"] = "OK"
    else:
        logger.error(f"❌ Public directory {public_root} does not exist")
        results["public_dir"]["status"] = "MISSING"
        all_good = False

    results["overall_status"] = "PASS" if all_good else "FAIL"
    return results


if __name__ == "__main__":
    """
    Create the configured message store when executed directly.
    """
    from contact_site.core.config import get_settings
    from contact_site.db.store import JsonFileMessageStore

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    settings = get_settings()
    store = JsonFileMessageStore(settings.message_store)
    init_success = initialize_store(store)
    verification = verify_store_setup(store, settings.public_root)

    print("\n" + "=" * 60)
    print("STORE INITIALIZATION SUMMARY")
    print("=" * 60)
    print(f"Initialization: {'SUCCESS' if init_success else 'FAILED'}")
    print(f"Verification: {verification['overall_status']}")
    print(f"Store: {verification['store']['location']} ({verification['store']['status']})")
    print(f"Public dir: {verification['public_dir']['location']} ({verification['public_dir']['status']})")
    print("=" * 60)
