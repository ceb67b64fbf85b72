import re
from typing import Optional

import boto3
import botocore.session
from botocore.config import Config
from botocore.exceptions import NoCredentialsError

from credential_manager.observability.logger_adaptor import get_logger

logger = get_logger(__name__)


def get_region_name_from_hostname(hostname: str) -> str:
    """
    Extract region name from AWS RDS endpoint.
    Example: database-1.abc123xyz.us-east-1.rds.amazonaws.com -> us-east-1

    Args:
        hostname (str): The RDS host endpoint

    Returns:
        str: AWS region name

    Raises:
        ValueError: If the hostname carries no AWS region
    """
    match = re.search(r"\.([a-z]{2}-[a-z]+-\d)\.", hostname)
    if match:
        return match.group(1)
    # Some services may use - instead of . (rare)
    match = re.search(r"-([a-z]{2}-[a-z]+-\d)\.", hostname)
    if match:
        return match.group(1)
    raise ValueError(f"Could not find valid AWS region in hostname: {hostname}")


def create_aws_session(timeout: Optional[float] = None) -> boto3.Session:
    """
    Create a boto3 session on the ambient AWS credential chain.

    The default chain covers environment variables, shared config files,
    EKS service-account roles (STS web identity), container credentials and
    instance profiles.

    When ``timeout`` is given, the instance metadata lookup is limited to a
    single attempt of ``timeout`` seconds, and every client the session
    creates (the STS client used for web identity and assumed roles
    included) gets connect/read timeouts of ``timeout`` seconds and no
    retries. Container credentials keep botocore's own fixed timeout and a
    ``credential_process`` command is not bounded at all; callers discard
    results that arrive after their deadline.

    Args:
        timeout (float, optional): Upper bound in seconds for each network
            call made while resolving credentials

    Returns:
        boto3.Session: Session whose credentials have not been loaded yet
    """
    botocore_session = botocore.session.get_session()
    if timeout is not None:
        # botocore rejects a zero timeout
        bounded = max(timeout, 0.001)
        # Set on the config store so the value is not truncated to an int
        config_store = botocore_session.get_component("config_store")
        config_store.set_config_variable("metadata_service_timeout", bounded)
        config_store.set_config_variable("metadata_service_num_attempts", 1)
        botocore_session.set_default_client_config(
            Config(
                connect_timeout=bounded,
                read_timeout=bounded,
                retries={"total_max_attempts": 1},
            )
        )
    return boto3.Session(botocore_session=botocore_session)


def generate_aws_rds_token(
    *,
    host: str,
    port: int,
    username: str,
    region: Optional[str] = None,
    timeout: Optional[float] = None,
) -> str:
    """
    Generate an RDS IAM authentication token with the ambient AWS identity.

    The token is a presigned request that the database accepts as a password
    for 15 minutes. Presigning is local; the only network calls are the ones
    made while resolving credentials, which happens before signing.

    Args:
        host (str): The RDS host endpoint
        port (int): Database port
        username (str): The database username
        region (str, optional): AWS region name. Parsed from ``host`` if omitted
        timeout (float, optional): Upper bound in seconds for credential
            resolution, see :func:`create_aws_session`

    Returns:
        str: RDS authentication token

    Raises:
        NoCredentialsError: If the credential chain yields no identity
    """
    region = region or get_region_name_from_hostname(host)
    logger.debug(f"Generating RDS auth token for {username}@{host}:{port} in {region}")

    session = create_aws_session(timeout=timeout)
    if session.get_credentials() is None:
        raise NoCredentialsError()

    rds_client = session.client("rds", region_name=region)
    token: str = rds_client.generate_db_auth_token(
        DBHostname=host, Port=port, DBUsername=username, Region=region
    )
    return token
