"""Capability contract implemented by every credential source."""

from abc import ABC, abstractmethod

from credential_manager.context import OperationContext
from credential_manager.types import Credential


class CredentialSource(ABC):
    """Abstract base class for pluggable credential sources.

    A source knows how to produce a :class:`Credential` or fail. Sources
    either mint a new value on every call or return a fixed one; repeated
    calls never corrupt external state.

    Example:
        >>> class EnvPasswordSource(CredentialSource):
        ...     def get_credentials(self, ctx):
        ...         ctx.raise_if_done()
        ...         return Credential(key="env", value=os.environ["PGPASSWORD"])
        ...
        ...     def name(self):
        ...         return "env_password"
    """

    @abstractmethod
    def get_credentials(self, ctx: OperationContext) -> Credential:
        """Attempt to produce a credential.

        Args:
            ctx: Operation context. Implementations must not block past its
                deadline or after it is cancelled.

        Returns:
            Credential: A freshly built credential.

        Raises:
            OperationCancelledError: If the context is cancelled.
            DeadlineExceededError: If the context deadline elapses.
            SourceUnavailableError: If the source cannot produce a credential.
        """

    @abstractmethod
    def name(self) -> str:
        """Stable identifier used in logs."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name()!r})"
