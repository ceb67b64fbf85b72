"""Database credential resolution from an ordered list of pluggable sources.

The :class:`CredentialManager` tries each :class:`CredentialSource` in order
and returns the first :class:`Credential` produced. A typical deployment puts
a dynamic IAM-token source first and a static password source behind it as a
fallback.

Quick Start:
    >>> from credential_manager import (
    ...     CredentialManager,
    ...     DynamicRDSSource,
    ...     OperationContext,
    ...     StaticRDSPostgresSource,
    ... )
    >>>
    >>> manager = CredentialManager(
    ...     [
    ...         DynamicRDSSource(),  # DB_HOST, DB_USER, ... from the environment
    ...         StaticRDSPostgresSource(
    ...             "localhost", 5432, "fallback_user", "fallback_password", "local_db"
    ...         ),
    ...     ]
    ... )
    >>> with OperationContext.with_timeout(10) as ctx:
    ...     creds = manager.get_first_valid(ctx)
    >>> creds.metadata.get("auth_method")
    'iam_token'
"""

from credential_manager.config import (
    DatabaseSettings,
    RDSConnectionParams,
    resolve_connection_params,
)
from credential_manager.context import OperationContext
from credential_manager.exceptions import (
    ContextError,
    CredentialError,
    DeadlineExceededError,
    NoValidSourceError,
    OperationCancelledError,
    SourceUnavailableError,
)
from credential_manager.manager import CredentialManager
from credential_manager.sources import (
    CredentialSource,
    DynamicRDSSource,
    StaticRDSPostgresSource,
    TokenGenerator,
)
from credential_manager.types import Credential

__all__ = [
    # Core types
    "Credential",
    "OperationContext",
    # Configuration
    "DatabaseSettings",
    "RDSConnectionParams",
    "resolve_connection_params",
    # Sources
    "CredentialSource",
    "DynamicRDSSource",
    "StaticRDSPostgresSource",
    "TokenGenerator",
    # Manager
    "CredentialManager",
    # Exceptions
    "ContextError",
    "CredentialError",
    "DeadlineExceededError",
    "NoValidSourceError",
    "OperationCancelledError",
    "SourceUnavailableError",
]
