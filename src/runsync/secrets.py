"""Credentials for Lambda deployments, read from AWS Secrets Manager.

Secrets are JSON objects stored per environment:

    runsync/{ENVIRONMENT}/supabase/credentials        {"url": ..., "key": ...}
    runsync/{ENVIRONMENT}/workout-source/credentials  {"url": ..., "token": ...}

Local runs use RunSyncSettings instead.
"""

import json
import logging
import os
from functools import lru_cache
from typing import Any

logger = logging.getLogger(__name__)

SUPABASE_SECRET = "supabase/credentials"
WORKOUT_SOURCE_SECRET = "workout-source/credentials"


def is_running_in_lambda() -> bool:
    return "AWS_LAMBDA_FUNCTION_NAME" in os.environ


def secret_name(kind: str) -> str:
    """Full secret name for kind in the current ENVIRONMENT (default "dev")."""
    return f"runsync/{os.environ.get('ENVIRONMENT', 'dev')}/{kind}"


@lru_cache
def get_secret(name: str) -> dict[str, Any]:
    """
    Load and decode one JSON secret. Cached for the lifetime of the Lambda container.

    Raises:
        botocore.exceptions.ClientError: If the secret is missing or not readable
    """
    import boto3
    from botocore.exceptions import ClientError

    try:
        payload = boto3.client("secretsmanager").get_secret_value(SecretId=name)
    except ClientError as e:
        code = e.response.get("Error", {}).get("Code", "unknown")
        logger.error(f"Secrets Manager refused {name} ({code})")
        raise

    secret: dict[str, Any] = json.loads(payload["SecretString"])
    logger.debug(f"Loaded secret {name}")
    return secret


def get_supabase_credentials() -> dict[str, str]:
    """Supabase URL and service role key ("url", "key")."""
    return get_secret(secret_name(SUPABASE_SECRET))


def get_workout_source_credentials() -> dict[str, str]:
    """Workout source base URL and bearer token ("url", "token")."""
    return get_secret(secret_name(WORKOUT_SOURCE_SECRET))
