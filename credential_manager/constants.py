import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")

# Logger Constants
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Database Connection Defaults
DEFAULT_DB_PORT = 5432
DEFAULT_AWS_REGION = "us-west-2"

# RDS IAM auth tokens are valid for 15 minutes after issuance
IAM_TOKEN_VALIDITY = timedelta(minutes=15)

# Credential Manager Constants
LOCK_POLL_INTERVAL_SECONDS = float(
    os.getenv("CREDENTIAL_MANAGER_LOCK_POLL_INTERVAL_SECONDS", "0.05")
)

# Credential keys, source names and metadata values
STATIC_RDS_CREDENTIAL_KEY = "rds_postgres"
DYNAMIC_RDS_CREDENTIAL_KEY = "dynamic_rds_postgres"
STATIC_RDS_SOURCE_NAME = "static_rds_postgres"
DYNAMIC_RDS_SOURCE_NAME = "dynamic_rds_postgres"
RDS_POSTGRES_SERVICE = "rds_postgres"

METADATA_AUTH_METHOD = "auth_method"
AUTH_METHOD_IAM_TOKEN = "iam_token"
AUTH_METHOD_PASSWORD = "password"
SOURCE_TYPE_STATIC = "static"
SOURCE_TYPE_DYNAMIC = "dynamic"
