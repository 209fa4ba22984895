"""
Session - Wire the catalog, progress engine and evaluator together.

The presentation layer holds one Session for the lifetime of the app
and calls into `engine` and `evaluator`.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from swiftcamp.classroom import (
    Catalog,
    MemoryProgressStore,
    ProgressEngine,
    ProgressStore,
    ProgressStoreError,
    SQLiteProgressStore,
    load_catalog,
)
from swiftcamp.config import Settings, get_settings
from swiftcamp.sandbox import CodeEvaluator


logger = logging.getLogger(__name__)


@dataclass
class Session:
    settings: Settings
    catalog: Catalog
    engine: ProgressEngine
    evaluator: CodeEvaluator

    @classmethod
    def create(
        cls,
        settings: Optional[Settings] = None,
        store: Optional[ProgressStore] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> "Session":
        """
        Build a session from settings.

        Without an explicit store, progress is kept in the configured
        SQLite database, or in memory if that database can't be opened.
        """
        settings = settings or get_settings()
        catalog = load_catalog(settings.content_path)

        if store is None:
            try:
                store = SQLiteProgressStore(settings.progress_db)
            except ProgressStoreError as e:
                logger.warning(f"Progress will not be saved: {e}")
                store = MemoryProgressStore()

        return cls(
            settings=settings,
            catalog=catalog,
            engine=ProgressEngine(catalog, store, clock=clock),
            evaluator=CodeEvaluator(delay=settings.execution_delay),
        )

    def close(self):
        self.evaluator.shutdown()

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
