"""
Mapping Store

Durable persistence for UrlMapping rows, keyed by short code.

Contract:
- initialize() creates the table if it is missing and is safe to repeat
- insert() either commits one new row or leaves the table untouched; a
  taken short code is reported as InsertResult.DUPLICATE, detected from the
  unique index rather than from a prior SELECT
- lookup() returns the mapping or None
- any connection or transport failure raises StoreUnavailableError

The store keeps no lock of its own. Each call checks a session out of the
engine's pool and returns it when the call finishes, and the database decides
which of two racing inserts for the same code wins.
"""

import enum
import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from shortener.core.exceptions import StoreUnavailableError
from shortener.db.models import UrlMapping

logger = logging.getLogger(__name__)

# Driver-level socket errors are not always wrapped by SQLAlchemy
STORE_ERRORS = (SQLAlchemyError, OSError)


class InsertResult(enum.Enum):
    """Outcome of a single insert attempt."""
    INSERTED = "inserted"
    DUPLICATE = "duplicate"


class MappingStore:
    """
    Read/write access to the url_mappings table.

    One instance is created at startup and shared by all requests.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        session_maker: async_sessionmaker[AsyncSession],
    ):
        self.engine = engine
        self.session_maker = session_maker

    async def initialize(self) -> None:
        """
        Create the url_mappings table and its unique index if absent.

        Raises:
            StoreUnavailableError: If the database cannot be reached
        """
        try:
            async with self.engine.begin() as conn:
                # create_all checks for existing tables first
                await conn.run_sync(
                    SQLModel.metadata.create_all,
                    tables=[UrlMapping.__table__],
                )
        except STORE_ERRORS as e:
            raise StoreUnavailableError(
                "failed to initialize url_mappings table",
                original_error=e
            ) from e
        logger.info("Mapping store initialized")

    async def insert(self, short_code: str, long_url: str) -> InsertResult:
        """
        Persist a new mapping.

        Args:
            short_code: Candidate code, must not exist yet
            long_url: Already validated original URL

        Returns:
            InsertResult.INSERTED if the row was committed,
            InsertResult.DUPLICATE if short_code is already taken

        Raises:
            StoreUnavailableError: On connection or transport failure
        """
        mapping = UrlMapping(short_code=short_code, long_url=long_url)
        try:
            async with self.session_maker() as session:
                session.add(mapping)
                try:
                    await session.commit()
                except IntegrityError:
                    await session.rollback()
                    logger.info(f"Short code collision on {short_code!r}")
                    return InsertResult.DUPLICATE
        except STORE_ERRORS as e:
            raise StoreUnavailableError(
                f"failed to insert mapping for {short_code!r}",
                original_error=e
            ) from e
        return InsertResult.INSERTED

    async def lookup(self, short_code: str) -> Optional[UrlMapping]:
        """
        Fetch the mapping for a short code.

        Returns:
            UrlMapping if found, None otherwise

        Raises:
            StoreUnavailableError: On connection or transport failure
        """
        statement = select(UrlMapping).where(UrlMapping.short_code == short_code)
        try:
            async with self.session_maker() as session:
                result = await session.exec(statement)
                return result.first()
        except STORE_ERRORS as e:
            raise StoreUnavailableError(
                f"failed to look up {short_code!r}",
                original_error=e
            ) from e

    async def ping(self) -> bool:
        """Return True if the database answers a trivial query."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except STORE_ERRORS as e:
            logger.warning(f"Database ping failed: {e}")
            return False
        return True

    async def close(self) -> None:
        """Release every pooled connection."""
        await self.engine.dispose()
