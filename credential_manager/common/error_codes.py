"""
Error codes for credential-manager.

Error codes follow the format: {Component}-{HTTP_Code}-{Unique_ID}

Components:
- Credential: Credential source and resolution errors
- Context: Cancellation and deadline errors
"""

from enum import Enum
from typing import Dict


class ErrorComponent(Enum):
    """Components that can generate errors in the system."""

    CREDENTIAL = "Credential"
    CONTEXT = "Context"


class ErrorCode:
    """Error code with component, HTTP code, and description."""

    def __init__(
        self, component: str, http_code: str, unique_id: str, description: str
    ):
        self.code = f"{component}-{http_code}-{unique_id}"
        self.description = description

    def __str__(self) -> str:
        return f"{self.code}: {self.description}"


# Credential Errors
CREDENTIAL_ERRORS = {
    "CREDENTIAL_ERROR": ErrorCode(
        ErrorComponent.CREDENTIAL.value, "500", "00", "Credential error"
    ),
    "SOURCE_UNAVAILABLE": ErrorCode(
        ErrorComponent.CREDENTIAL.value,
        "503",
        "00",
        "Credential source failed to produce a credential",
    ),
    "NO_VALID_SOURCE": ErrorCode(
        ErrorComponent.CREDENTIAL.value,
        "503",
        "01",
        "No valid credential sources found",
    ),
}

# Context Errors
CONTEXT_ERRORS = {
    "OPERATION_CANCELLED": ErrorCode(
        ErrorComponent.CONTEXT.value, "499", "00", "Operation cancelled"
    ),
    "DEADLINE_EXCEEDED": ErrorCode(
        ErrorComponent.CONTEXT.value, "504", "00", "Operation deadline exceeded"
    ),
}

# Combined dictionary of all error codes
ERROR_CODES: Dict[str, ErrorCode] = {
    **CREDENTIAL_ERRORS,
    **CONTEXT_ERRORS,
}
