"""Custom exceptions for credential operations.

These exceptions provide specific error handling for the different failure
modes of credential resolution. Each exception carries an ``error_code``
from :mod:`credential_manager.common.error_codes`.
"""

from typing import List, Optional, Tuple

from credential_manager.common.error_codes import (
    CONTEXT_ERRORS,
    CREDENTIAL_ERRORS,
    ErrorCode,
)


class CredentialError(Exception):
    """Base exception for credential operations.

    All credential-related exceptions inherit from this class,
    allowing for broad exception handling when needed.
    """

    error_code: ErrorCode = CREDENTIAL_ERRORS["CREDENTIAL_ERROR"]


class SourceUnavailableError(CredentialError):
    """Raised when a single credential source fails to produce a credential.

    This can occur when:
    - The external signing service is unreachable
    - The signing request is rejected
    - The source is misconfigured (missing host, empty password, ...)

    The manager recovers from this error locally: it is logged and the next
    source is tried.

    Attributes:
        source_name: Name of the source that failed, if known.

    Example:
        >>> raise SourceUnavailableError(
        ...     "failed to generate RDS auth token: AccessDenied",
        ...     source_name="dynamic_rds_postgres",
        ... )
    """

    error_code = CREDENTIAL_ERRORS["SOURCE_UNAVAILABLE"]

    def __init__(self, message: str, source_name: Optional[str] = None):
        super().__init__(message)
        self.source_name = source_name


class NoValidSourceError(CredentialError):
    """Raised when every configured source failed (or none is configured).

    Attributes:
        errors: ``(source_name, exception)`` pairs in the order the sources
            were tried. Empty when no sources were configured.
    """

    error_code = CREDENTIAL_ERRORS["NO_VALID_SOURCE"]

    def __init__(
        self,
        message: str = "no valid credential sources found",
        errors: Optional[List[Tuple[str, Exception]]] = None,
    ):
        super().__init__(message)
        self.errors = errors or []


class ContextError(CredentialError):
    """Base exception raised when an operation context is done.

    Context errors are never swallowed by the manager: they abort the
    resolution loop and propagate to the caller.
    """


class OperationCancelledError(ContextError):
    """Raised when the operation context was cancelled."""

    error_code = CONTEXT_ERRORS["OPERATION_CANCELLED"]

    def __init__(self, message: str = "operation cancelled"):
        super().__init__(message)


class DeadlineExceededError(ContextError):
    """Raised when the operation context deadline elapsed."""

    error_code = CONTEXT_ERRORS["DEADLINE_EXCEEDED"]

    def __init__(self, message: str = "operation deadline exceeded"):
        super().__init__(message)
