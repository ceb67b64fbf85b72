"""Core value type produced by credential sources.

Example:
    >>> from credential_manager.types import Credential
    >>>
    >>> Credential(
    ...     key="rds_postgres",
    ...     value="s3cret",
    ...     metadata={"host": "localhost", "port": "5432"},
    ... )
    Credential(key='rds_postgres', expiry=None, metadata=...)
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class Credential:
    """One resolved secret plus the metadata needed to use it.

    A new Credential is built on every successful retrieval and is never
    mutated afterwards; ``metadata`` is stored as a read-only view.

    Attributes:
        key: Identifier of the source strategy that produced it.
        value: The secret material (password, token). Never empty and
            excluded from ``repr()``.
        expiry: Timezone-aware instant after which ``value`` is stale.
            ``None`` means the credential never expires.
        metadata: Descriptive attributes (host, port, username, database,
            auth_method, region, ...) used to build connection parameters.

    Raises:
        ValueError: If ``value`` is empty, or ``expiry`` is naive or not in
            the future.
    """

    key: str
    value: str = field(repr=False)
    expiry: Optional[datetime] = None
    metadata: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError(f"Credential '{self.key}' must have a non-empty value")
        if self.expiry is not None:
            if self.expiry.tzinfo is None:
                raise ValueError("Credential expiry must be timezone-aware")
            if self.expiry <= datetime.now(timezone.utc):
                raise ValueError("Credential expiry must be in the future")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __hash__(self) -> int:
        return hash(
            (self.key, self.value, self.expiry, frozenset(self.metadata.items()))
        )
