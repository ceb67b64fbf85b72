"""Static password source for RDS Postgres."""

from credential_manager.constants import (
    RDS_POSTGRES_SERVICE,
    SOURCE_TYPE_STATIC,
    STATIC_RDS_CREDENTIAL_KEY,
    STATIC_RDS_SOURCE_NAME,
)
from credential_manager.context import OperationContext
from credential_manager.exceptions import SourceUnavailableError
from credential_manager.sources.base import CredentialSource
from credential_manager.types import Credential


class StaticRDSPostgresSource(CredentialSource):
    """Provides a single pre-configured password credential.

    The credential never expires. Typically placed last in a manager's
    source list as the fallback behind a dynamic source.
    """

    def __init__(
        self, host: str, port: int, username: str, password: str, database: str
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.database = database

    def get_credentials(self, ctx: OperationContext) -> Credential:
        ctx.raise_if_done()

        if not self.password:
            raise SourceUnavailableError(
                "static source is misconfigured: password is empty",
                source_name=self.name(),
            )

        return Credential(
            key=STATIC_RDS_CREDENTIAL_KEY,
            value=self.password,
            expiry=None,
            metadata={
                "host": self.host,
                "port": str(self.port),
                "username": self.username,
                "database": self.database,
                "type": SOURCE_TYPE_STATIC,
                "service": RDS_POSTGRES_SERVICE,
            },
        )

    def name(self) -> str:
        return STATIC_RDS_SOURCE_NAME
