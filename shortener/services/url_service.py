"""
URL Shortening Service

This service handles the core business logic for URL shortening:
- Validating URLs before anything touches the database
- Drawing random short codes and persisting them
- Retrying on short code collisions, up to a fixed number of attempts
- Resolving short codes back to the original URL

Design Decisions:
- Random codes: 8 base62 characters, not derived from row ids
- Uniqueness is enforced by the database unique index; the service never
  checks for a free code before inserting
- Each insert attempt yields an InsertResult, so retry vs. abort is an
  ordinary branch. Store failures abort at once and are never retried
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from shortener.core.exceptions import GenerationExhaustedError, InvalidURLError
from shortener.core.validators import is_valid_long_url
from shortener.services.code_generator import generate_short_code
from shortener.services.mapping_store import InsertResult, MappingStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5


@dataclass(frozen=True)
class ShortenResult:
    """A freshly created mapping, as returned to the API layer."""
    short_code: str
    original_url: str


class URLShorteningService:
    """
    Core business logic for URL shortening.

    Holds no per-request state; one instance is shared across requests.
    """

    def __init__(
        self,
        store: MappingStore,
        generator: Callable[[], str] = generate_short_code,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        """
        Initialize the URL shortening service.

        Args:
            store: Mapping store used for inserts and lookups
            generator: Returns a new candidate short code on every call
            max_attempts: Candidates to try before GenerationExhaustedError
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.store = store
        self.generator = generator
        self.max_attempts = max_attempts

    async def create(self, long_url: str) -> ShortenResult:
        """
        Create a new mapping for long_url under a fresh random code.

        Every call creates a new mapping, even for a URL shortened before.

        Returns:
            ShortenResult with the new short code and the original URL

        Raises:
            InvalidURLError: If long_url is empty or not http(s)
            GenerationExhaustedError: If every attempt hit a taken code
            StoreUnavailableError: If the database fails (not retried)
        """
        if not is_valid_long_url(long_url):
            raise InvalidURLError(long_url)

        for attempt in range(1, self.max_attempts + 1):
            short_code = self.generator()
            result = await self.store.insert(short_code, long_url)

            if result is InsertResult.INSERTED:
                return ShortenResult(short_code=short_code, original_url=long_url)

            logger.warning(
                f"Short code {short_code!r} already taken "
                f"(attempt {attempt}/{self.max_attempts})"
            )

        raise GenerationExhaustedError(self.max_attempts)

    async def resolve(self, short_code: str) -> Optional[str]:
        """
        Get the original URL for a short code.

        Returns:
            The stored long URL, or None if the code was never created

        Raises:
            StoreUnavailableError: If the database fails
        """
        mapping = await self.store.lookup(short_code)
        if mapping is None:
            return None
        return mapping.long_url
