from credential_manager.sources.base import CredentialSource
from credential_manager.sources.dynamic import DynamicRDSSource, TokenGenerator
from credential_manager.sources.static import StaticRDSPostgresSource

__all__ = [
    "CredentialSource",
    "DynamicRDSSource",
    "StaticRDSPostgresSource",
    "TokenGenerator",
]
