"""Application context for dependency injection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine

from .config import BaseConfig
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import SQLModelHabitStore
from .logging_config import setup_logging
from .services.tracker import HabitTracker


@dataclass
class AppContext:
    """Configuration, storage and the habit tracker wired together."""

    config: BaseConfig
    engine: Engine
    session_factory: SessionFactory
    store: SQLModelHabitStore
    tracker: HabitTracker
    logger: Optional[logging.Logger] = None


def create_app_context(config: Optional[BaseConfig] = None, *, configure_logging: bool = True) -> AppContext:
    """Create the database, the store and a tracker loaded from it."""

    if config is None:
        config = BaseConfig()

    logger = setup_logging(config) if configure_logging else None

    engine, session_factory = bootstrap_database(config)

    store = SQLModelHabitStore(session_factory, key=config.STORAGE_KEY)
    tracker = HabitTracker(
        store,
        default_habits=config.DEFAULT_HABITS if config.SEED_DEFAULTS else (),
    )
    tracker.load()

    return AppContext(
        config=config,
        engine=engine,
        session_factory=session_factory,
        store=store,
        tracker=tracker,
        logger=logger,
    )
