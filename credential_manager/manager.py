"""First-valid credential resolution over an ordered list of sources."""

import threading
from typing import Iterable, List, Optional, Tuple

from credential_manager.constants import LOCK_POLL_INTERVAL_SECONDS
from credential_manager.context import OperationContext
from credential_manager.exceptions import ContextError, NoValidSourceError
from credential_manager.observability.logger_adaptor import get_logger
from credential_manager.sources.base import CredentialSource
from credential_manager.types import Credential

logger = get_logger(__name__)


class CredentialManager:
    """Resolves credentials from the first source that succeeds.

    Sources are tried in declaration order; the order is the priority. The
    list is fixed at construction.

    Every call to :meth:`get_first_valid` holds a single lock for the whole
    resolution attempt, so concurrent callers are served strictly one after
    the other and never trigger duplicate concurrent signing calls. Callers
    that need parallel resolution should use separate managers.

    Nothing is cached: each call re-resolves from scratch, which is also how
    short-lived tokens are refreshed.

    Example:
        >>> manager = CredentialManager([dynamic_source, static_source])
        >>> with OperationContext.with_timeout(10) as ctx:
        ...     credential = manager.get_first_valid(ctx)
    """

    def __init__(self, sources: Iterable[CredentialSource]) -> None:
        self._sources: Tuple[CredentialSource, ...] = tuple(sources)
        self._lock = threading.Lock()

    @property
    def sources(self) -> Tuple[CredentialSource, ...]:
        return self._sources

    def get_first_valid(self, ctx: Optional[OperationContext] = None) -> Credential:
        """Fetch credentials from the first source that succeeds.

        A context that is already done when the call starts (or becomes done
        while waiting for the lock) fails before any source is invoked.

        Args:
            ctx: Operation context carrying cancellation and deadline.
                Defaults to a background context.

        Returns:
            Credential: The credential of the first successful source.

        Raises:
            OperationCancelledError: If the context is cancelled.
            DeadlineExceededError: If the context deadline elapses.
            NoValidSourceError: If every source failed or none is configured.
        """
        if ctx is None:
            ctx = OperationContext.background()

        self._acquire(ctx)
        try:
            return self._resolve(ctx)
        finally:
            self._lock.release()

    def _acquire(self, ctx: OperationContext) -> None:
        while True:
            ctx.raise_if_done()
            wait = LOCK_POLL_INTERVAL_SECONDS
            remaining = ctx.remaining()
            if remaining is not None:
                wait = min(wait, remaining)
            if self._lock.acquire(timeout=wait):
                return

    def _resolve(self, ctx: OperationContext) -> Credential:
        errors: List[Tuple[str, Exception]] = []

        for source in self._sources:
            source_name = type(source).__name__
            try:
                source_name = source.name()
                ctx.raise_if_done()
                logger.debug(f"Trying credential source '{source_name}'")
                credential = source.get_credentials(ctx)
            except ContextError as e:
                logger.warning(
                    f"Aborting credential resolution at source '{source_name}': {e}"
                )
                raise
            except Exception as e:
                logger.warning(f"source '{source_name}' failed: {e}")
                errors.append((source_name, e))
                continue

            logger.debug(f"Resolved credential '{credential.key}' from '{source_name}'")
            return credential

        raise NoValidSourceError(errors=errors)
