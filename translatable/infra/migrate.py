from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import MetaData

from . import db
from .models import Base

log = logging.getLogger(__name__)


async def migrate(metadata: Optional[MetaData] = None) -> None:
    """Create missing tables for ``metadata`` (defaults to ``Base.metadata``)."""
    assert db.engine is not None, "Engine not initialized"
    metadata = metadata if metadata is not None else Base.metadata
    async with db.engine.begin() as conn:  # type: ignore
        await conn.run_sync(metadata.create_all)
    log.debug("Schema ready (%d tables)", len(metadata.tables))
