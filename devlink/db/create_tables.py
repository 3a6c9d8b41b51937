"""Schema management: create or drop every devlink table."""
from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # ensure models are imported for metadata

logger = logging.getLogger(__name__)


def create_all(engine=None) -> None:
    Base.metadata.create_all(bind=engine or get_engine())


def drop_all(engine=None) -> None:
    Base.metadata.drop_all(bind=engine or get_engine())


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    try:
        create_all()
        logger.info("Database tables created (%s)", ", ".join(sorted(Base.metadata.tables)))
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
