"""
Scheduled sync worker.

Runs a full catalog sync (folders/images, testimonials, packages, FAQs) on
startup and then every SYNC_INTERVAL_SECONDS. A failed run is recorded in
sync_runs and logged; the worker keeps its schedule.

Usage:
    python worker.py           # loop forever
    python worker.py --once    # single run, exit code 1 on failure
"""

import os
import sys
import time
import logging

# Add catalog to path
sys.path.insert(0, os.path.dirname(__file__))

from catalog.clients import CloudinaryClient, SupabaseStorageClient
from catalog.core.config import settings
from catalog.core.logging_config import setup_logging
from catalog.database import SessionLocal, init_db
from catalog.exceptions import SyncFailedError
from catalog.services.sync_service import SyncService

setup_logging(log_level=settings.log_level, log_format=settings.log_format)
logger = logging.getLogger("worker")

# Seconds to wait before retrying after an unexpected worker error
ERROR_BACKOFF_SECONDS = 60


def run_once(namespace=None, storage=None) -> bool:
    """Run one scheduled sync. Returns True when every stage succeeded."""
    namespace = namespace or CloudinaryClient.from_settings(settings)
    storage = storage or SupabaseStorageClient.from_settings(settings)

    db = SessionLocal()
    try:
        run = SyncService(db, settings, namespace, storage).run_sync(trigger="scheduled")
        logger.info(f"Scheduled sync {run.id} completed")
        return True
    except SyncFailedError as e:
        logger.warning(f"Scheduled sync failed at stage '{e.stage}': {e.cause}")
        return False
    finally:
        db.close()


def main() -> None:
    """Sync on startup, then once per interval, until interrupted."""
    init_db()

    if "--once" in sys.argv[1:]:
        sys.exit(0 if run_once() else 1)

    interval = settings.sync_interval_seconds
    logger.info(f"Worker started, syncing every {interval}s")

    namespace = CloudinaryClient.from_settings(settings)
    storage = SupabaseStorageClient.from_settings(settings)

    while True:
        try:
            run_once(namespace, storage)
            time.sleep(interval)
        except KeyboardInterrupt:
            logger.info("Worker shutting down")
            break
        except Exception as e:
            logger.error(f"Worker error: {e}", exc_info=True)
            time.sleep(ERROR_BACKOFF_SECONDS)


if __name__ == "__main__":
    main()
