from credential_manager.common.error_codes import (
    CONTEXT_ERRORS,
    CREDENTIAL_ERRORS,
    ERROR_CODES,
    ErrorCode,
)
from credential_manager.exceptions import (
    CredentialError,
    DeadlineExceededError,
    NoValidSourceError,
    OperationCancelledError,
    SourceUnavailableError,
)


def test_error_code_format():
    code = ErrorCode("Credential", "503", "00", "Source failed")
    assert code.code == "Credential-503-00"
    assert str(code) == "Credential-503-00: Source failed"


def test_all_codes_are_unique():
    codes = [error.code for error in ERROR_CODES.values()]
    assert len(codes) == len(set(codes))
    assert len(ERROR_CODES) == len(CREDENTIAL_ERRORS) + len(CONTEXT_ERRORS)


def test_exceptions_carry_error_codes():
    assert SourceUnavailableError("x").error_code is CREDENTIAL_ERRORS["SOURCE_UNAVAILABLE"]
    assert NoValidSourceError().error_code is CREDENTIAL_ERRORS["NO_VALID_SOURCE"]
    assert OperationCancelledError().error_code is CONTEXT_ERRORS["OPERATION_CANCELLED"]
    assert DeadlineExceededError().error_code is CONTEXT_ERRORS["DEADLINE_EXCEEDED"]


def test_exception_hierarchy():
    for exc in (
        SourceUnavailableError("x"),
        NoValidSourceError(),
        OperationCancelledError(),
        DeadlineExceededError(),
    ):
        assert isinstance(exc, CredentialError)


def test_no_valid_source_defaults():
    error = NoValidSourceError()
    assert str(error) == "no valid credential sources found"
    assert error.errors == []


def test_source_unavailable_keeps_source_name():
    error = SourceUnavailableError("boom", source_name="static_rds_postgres")
    assert error.source_name == "static_rds_postgres"
    assert str(error) == "boom"
