"""FastAPI application for the Consumables Tracker.

Run with uvicorn's factory mode, e.g.::

    uvicorn consumables.api.api_run:create_app --factory
"""
from pathlib import Path
from typing import Optional, Union
import logging

from fastapi import FastAPI

from consumables.api.routes import items
from consumables.domain.Catalogue import Catalogue
from consumables.infra.paths import BACKUPS_DIR, resolve_database_path
from consumables.utilities.backup import BackupManager
from consumables.utilities.config import BACKUP_KEEP, BACKUP_ON_SAVE

# Logging
logger = logging.getLogger("consumables_app")


def create_app(catalogue: Optional[Catalogue] = None,
               database_path: Optional[Union[str, Path]] = None) -> FastAPI:
    """Build the app around a catalogue.

    Without an explicit catalogue, a new one is loaded from ``database_path``
    (the configured database file by default). Read or parse failures
    propagate so the server does not start on a corrupt database.
    """
    database_path = resolve_database_path(database_path)
    if catalogue is None:
        backup = BackupManager(BACKUPS_DIR, keep=BACKUP_KEEP) if BACKUP_ON_SAVE else None
        catalogue = Catalogue(backup=backup)
        catalogue.load_from(database_path)

    app = FastAPI(title="Consumables Tracker API")
    app.state.catalogue = catalogue
    app.state.database_path = database_path
    app.include_router(items.router)
    logger.info("Serving %d consumables, saving to %s", catalogue.size(), database_path)
    return app
