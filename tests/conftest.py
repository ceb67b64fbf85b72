"""Global test configuration and fixtures."""

import os
import time
from typing import Any, Dict, List
from unittest.mock import patch

import pytest
from hypothesis import HealthCheck, settings
from loguru import logger

DB_ENV_VARS = ("DB_HOST", "DB_PORT", "DB_USER", "DB_NAME", "AWS_REGION")

# The autouse environment fixture is safe to share across generated examples.
settings.register_profile(
    "credential_manager",
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
settings.load_profile("credential_manager")


@pytest.fixture(autouse=True)
def isolated_db_env(monkeypatch, tmp_path):
    """Keep tests independent of the developer's DB_* variables and .env file."""
    for name in DB_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield


@pytest.fixture
def log_records():
    """Capture loguru records emitted while the test runs."""
    records: List[Dict[str, Any]] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


@pytest.fixture
def aws_environment(monkeypatch, tmp_path):
    """Leave the instance metadata service as the only AWS credential provider."""
    for name in list(os.environ):
        if name.startswith(("AWS_", "BOTO")):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "missing-config"))
    monkeypatch.setenv(
        "AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "missing-credentials")
    )
    monkeypatch.setenv("BOTO_CONFIG", str(tmp_path / "missing-boto"))


class SlowMetadataFetcher:
    """Instance metadata stand-in that answers only once its timeout runs out."""

    def __init__(self, timeout=1, num_attempts=1, **kwargs):
        self.timeout = timeout
        self.num_attempts = num_attempts

    def retrieve_iam_role_credentials(self):
        time.sleep(min(self.timeout * self.num_attempts, 2.0))
        return {}


@pytest.fixture
def slow_instance_metadata(aws_environment):
    """Replace the instance metadata fetcher with :class:`SlowMetadataFetcher`."""
    with patch("botocore.credentials.InstanceMetadataFetcher", SlowMetadataFetcher):
        yield
