"""Dynamic RDS source minting short-lived IAM authentication tokens.

Suitable for services running with an attached IAM role (for example an EKS
service account): the token is signed with the ambient AWS identity and is
accepted by the database as a password for 15 minutes.
"""

from datetime import datetime, timezone
from typing import Optional, Protocol

from credential_manager.common.aws_utils import generate_aws_rds_token
from credential_manager.config import (
    DatabaseSettings,
    RDSConnectionParams,
    resolve_connection_params,
)
from credential_manager.constants import (
    AUTH_METHOD_IAM_TOKEN,
    DYNAMIC_RDS_CREDENTIAL_KEY,
    DYNAMIC_RDS_SOURCE_NAME,
    IAM_TOKEN_VALIDITY,
    METADATA_AUTH_METHOD,
    RDS_POSTGRES_SERVICE,
    SOURCE_TYPE_DYNAMIC,
)
from credential_manager.context import OperationContext
from credential_manager.exceptions import ContextError, SourceUnavailableError
from credential_manager.observability.logger_adaptor import get_logger
from credential_manager.sources.base import CredentialSource
from credential_manager.types import Credential

logger = get_logger(__name__)


class TokenGenerator(Protocol):
    """Signs a time-boxed database authentication token."""

    def __call__(
        self,
        *,
        host: str,
        port: int,
        username: str,
        region: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> str:
        ...


class DynamicRDSSource(CredentialSource):
    """Generates temporary RDS IAM authentication tokens.

    Connection parameters left as "" / 0 are filled from ``settings``. When
    no settings object is injected, one is loaded from the environment at
    construction time (``DB_HOST``, ``DB_PORT``, ``DB_USER``, ``DB_NAME``,
    ``AWS_REGION``).

    Args:
        host: Database hostname.
        port: Database port.
        username: Database user mapped to the IAM identity.
        database: Database name, carried in the credential metadata.
        region: AWS region used for signing.
        settings: Fallback configuration provider.
        token_generator: Signing collaborator. Defaults to
            :func:`generate_aws_rds_token`.
    """

    def __init__(
        self,
        host: str = "",
        port: int = 0,
        username: str = "",
        database: str = "",
        region: str = "",
        *,
        settings: Optional[DatabaseSettings] = None,
        token_generator: Optional[TokenGenerator] = None,
    ) -> None:
        self._params = resolve_connection_params(
            host=host,
            port=port,
            username=username,
            database=database,
            region=region,
            settings=settings,
        )
        self._token_generator = token_generator or generate_aws_rds_token

    @classmethod
    def from_settings(
        cls,
        settings: DatabaseSettings,
        *,
        token_generator: Optional[TokenGenerator] = None,
    ) -> "DynamicRDSSource":
        return cls(settings=settings, token_generator=token_generator)

    @property
    def params(self) -> RDSConnectionParams:
        return self._params

    @property
    def host(self) -> str:
        return self._params.host

    @property
    def port(self) -> int:
        return self._params.port

    @property
    def username(self) -> str:
        return self._params.username

    @property
    def database(self) -> str:
        return self._params.database

    @property
    def region(self) -> str:
        return self._params.region

    @property
    def endpoint(self) -> str:
        return self._params.endpoint

    def get_credentials(self, ctx: OperationContext) -> Credential:
        """Generate a new RDS IAM authentication token.

        The token is not retried on failure; the manager moves on to the next
        source instead.

        Raises:
            OperationCancelledError: If the context is cancelled before or
                during signing.
            DeadlineExceededError: If the context deadline elapses before or
                during signing.
            SourceUnavailableError: If the source is misconfigured or signing
                fails.
        """
        ctx.raise_if_done()

        if not self.host or not self.username:
            raise SourceUnavailableError(
                "dynamic source is misconfigured: host and username are required",
                source_name=self.name(),
            )

        try:
            token = self._token_generator(
                host=self.host,
                port=self.port,
                username=self.username,
                region=self.region,
                timeout=ctx.remaining(),
            )
        except ContextError:
            raise
        except Exception as e:
            # A timeout hit because the deadline elapsed is the caller's error
            context_error = ctx.err()
            if context_error is not None:
                raise context_error from e
            raise SourceUnavailableError(
                f"failed to generate RDS auth token: {e}", source_name=self.name()
            ) from e

        # A token signed after the caller gave up is discarded.
        ctx.raise_if_done()

        if not token:
            raise SourceUnavailableError(
                "failed to generate RDS auth token: empty token returned",
                source_name=self.name(),
            )

        expiry = datetime.now(timezone.utc) + IAM_TOKEN_VALIDITY
        logger.debug(
            f"Generated RDS auth token for {self.username}@{self.endpoint}, "
            f"expires at {expiry.isoformat(timespec='seconds')}"
        )

        return Credential(
            key=DYNAMIC_RDS_CREDENTIAL_KEY,
            value=token,
            expiry=expiry,
            metadata={
                "host": self.host,
                "port": str(self.port),
                "username": self.username,
                "database": self.database,
                "region": self.region,
                "type": SOURCE_TYPE_DYNAMIC,
                "service": RDS_POSTGRES_SERVICE,
                METADATA_AUTH_METHOD: AUTH_METHOD_IAM_TOKEN,
                "expires_at": expiry.isoformat(timespec="seconds"),
                "endpoint": self.endpoint,
            },
        )

    def name(self) -> str:
        return DYNAMIC_RDS_SOURCE_NAME

    def is_token_expired(
        self, credential: Credential, now: Optional[datetime] = None
    ) -> bool:
        """Check whether ``credential`` has expired.

        Credentials without an expiry never expire.
        """
        if credential.expiry is None:
            return False
        if now is None:
            now = datetime.now(timezone.utc)
        return now >= credential.expiry

    def refresh_credentials(self, ctx: OperationContext) -> Credential:
        """Force a fresh token, regardless of any previously issued one."""
        return self.get_credentials(ctx)
