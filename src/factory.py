"""
factory - Composition root for the health log.

ALL dependency wiring happens here. No other module constructs its own
dependencies. Adapters (the CLI, tests) call this factory to get fully
configured services.

The factory owns the one storage handle of the process: initialize()
opens it and runs migrations, close() releases it. Every service it
creates shares that handle and the same RecordStore, so the per-category
write locks are shared too.

Usage:
    from factory import ServiceFactory
    from infrastructure.config import Settings

    config = Settings.from_env()
    async with ServiceFactory(config) as factory:
        tracker = factory.create_fluid_tracker()
        await tracker.load()
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional

from infrastructure.config import Settings
from infrastructure.persistence.connection import AsyncSQLiteConnection
from infrastructure.persistence.migrations import SQLiteSchemaManager, run_migrations
from infrastructure.persistence.fluid_repo import SQLiteFluidIntakeRepository
from infrastructure.persistence.mood_repo import SQLiteMoodLogRepository
from infrastructure.persistence.profile_repo import SQLiteProfileRepository
from infrastructure.reports.pdf_report import ReportLabRenderer
from domain.exceptions import SchemaError
from domain.ports import DocumentRenderer, ShareSink
from application.services.record_store import RecordStore
from application.services.fluid_tracker import FluidTracker
from application.services.mood_tracker import MoodTracker
from application.services.profile import ProfileService
from application.services.export import ExportService

logger = logging.getLogger(__name__)


class ServiceFactory:
    """Composition root. Wires all dependencies together.

    Call initialize() once at startup and close() at shutdown, or use the
    factory as an async context manager.
    """

    def __init__(self, config: Settings):
        self._config = config
        self._connection = AsyncSQLiteConnection(config.db_path)
        self._store = RecordStore(
            schema=SQLiteSchemaManager(self._connection),
            fluid_repo=SQLiteFluidIntakeRepository(self._connection),
            mood_repo=SQLiteMoodLogRepository(self._connection),
            profile_repo=SQLiteProfileRepository(self._connection),
        )
        self._initialized = False

    @property
    def config(self) -> Settings:
        return self._config

    @property
    def connection(self) -> AsyncSQLiteConnection:
        return self._connection

    async def initialize(self) -> None:
        """Open the database and create any missing tables.

        A schema failure is logged and re-raised; callers that only need
        a display fallback catch SchemaError themselves.
        """
        logger.info("Initializing ServiceFactory...")
        await self._connection.open()
        try:
            await run_migrations(self._connection)
        except SchemaError:
            logger.exception("Database migrations failed")
            raise
        self._initialized = True
        logger.info("ServiceFactory ready")

    async def close(self) -> None:
        await self._connection.close()
        self._initialized = False

    async def __aenter__(self) -> ServiceFactory:
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Service creation
    # ------------------------------------------------------------------

    def create_record_store(self) -> RecordStore:
        """The shared RecordStore (one per factory)."""
        self._ensure_initialized()
        return self._store

    def create_fluid_tracker(self, today: Optional[Callable[[], date]] = None) -> FluidTracker:
        self._ensure_initialized()
        return FluidTracker(self._store, today=today or date.today)

    def create_mood_tracker(self, today: Optional[Callable[[], date]] = None) -> MoodTracker:
        self._ensure_initialized()
        return MoodTracker(self._store, today=today or date.today)

    def create_profile_service(self) -> ProfileService:
        self._ensure_initialized()
        return ProfileService(
            self._store,
            default_display_name=self._config.default_display_name,
        )

    def create_export_service(
        self,
        sink: ShareSink,
        renderer: Optional[DocumentRenderer] = None,
    ) -> ExportService:
        """Create an ExportService that renders PDFs unless told otherwise."""
        self._ensure_initialized()
        return ExportService(
            store=self._store,
            renderer=renderer or ReportLabRenderer(),
            sink=sink,
            export_dir=self._config.export_dir,
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError(
                "ServiceFactory not initialized. Call await factory.initialize() first."
            )
