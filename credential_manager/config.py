"""Database connection settings and the explicit parameter resolution step.

Sources never read the process environment themselves. Callers either pass
explicit connection parameters, or inject a :class:`DatabaseSettings`
instance (loaded from the environment and an optional ``.env`` file) that
fills in whatever was left as an empty-string / zero sentinel.

Environment Variables:
    DB_HOST: Database hostname
    DB_PORT: Database port (defaults to 5432)
    DB_USER: Database username
    DB_NAME: Database name
    AWS_REGION: AWS region used to sign IAM tokens (defaults to us-west-2)
"""

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from credential_manager.constants import DEFAULT_AWS_REGION, DEFAULT_DB_PORT


class DatabaseSettings(BaseSettings):
    """Process-wide fallback for database connection parameters.

    Blank or unparsable ``DB_PORT`` values fall back to the default port and
    a blank ``AWS_REGION`` falls back to the default region.
    """

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        env_file=".env",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    host: str = ""
    port: int = DEFAULT_DB_PORT
    user: str = ""
    name: str = ""
    region: str = Field(
        default=DEFAULT_AWS_REGION, validation_alias=AliasChoices("AWS_REGION")
    )

    @field_validator("port", mode="before")
    @classmethod
    def default_port(cls, v: Any) -> int:
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_DB_PORT
        try:
            port = int(v)
        except (TypeError, ValueError):
            return DEFAULT_DB_PORT
        return port or DEFAULT_DB_PORT

    @field_validator("region", mode="before")
    @classmethod
    def default_region(cls, v: Any) -> str:
        if v is None or not str(v).strip():
            return DEFAULT_AWS_REGION
        return str(v).strip()


class RDSConnectionParams(BaseModel):
    """Fully resolved connection parameters for an RDS database."""

    model_config = ConfigDict(frozen=True)

    host: str
    port: int = Field(default=DEFAULT_DB_PORT, ge=1, le=65535)
    username: str
    database: str = ""
    region: str = DEFAULT_AWS_REGION

    @property
    def endpoint(self) -> str:
        return f"{self.host}:{self.port}"


def resolve_connection_params(
    host: str = "",
    port: int = 0,
    username: str = "",
    database: str = "",
    region: str = "",
    settings: Optional[DatabaseSettings] = None,
) -> RDSConnectionParams:
    """Resolve connection parameters from explicit values and settings.

    Explicit, non-sentinel arguments always win. Empty strings and a zero
    port are sentinels meaning "use the settings value".

    Args:
        host (str): Database hostname, or "" to use ``settings.host``.
        port (int): Database port, or 0 to use ``settings.port``.
        username (str): Database user, or "" to use ``settings.user``.
        database (str): Database name, or "" to use ``settings.name``.
        region (str): AWS region, or "" to use ``settings.region``.
        settings (DatabaseSettings, optional): Fallback values. Loaded from
            the environment when omitted.

    Returns:
        RDSConnectionParams: The resolved parameters.
    """
    if settings is None:
        settings = DatabaseSettings()

    return RDSConnectionParams(
        host=host or settings.host,
        port=port or settings.port or DEFAULT_DB_PORT,
        username=username or settings.user,
        database=database or settings.name,
        region=region or settings.region or DEFAULT_AWS_REGION,
    )
