"""
AWS Lambda handler for RunSync.

Runs one workout sync for a user. Invoked by:
- EventBridge (scheduled sync, user_id in the event)
- API Gateway (manual sync trigger, user_id in the JSON body or query string)
"""

import json
import logging
from datetime import UTC, datetime
from typing import Any

from runsync.services import build_sync_engine, build_workout_source

# Configure logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)


def _is_api_gateway(event: dict[str, Any]) -> bool:
    return event.get("source", "api-gateway") == "api-gateway" or "httpMethod" in event


def _extract_user_id(event: dict[str, Any]) -> str | None:
    if event.get("user_id"):
        return str(event["user_id"])

    params = event.get("queryStringParameters") or {}
    if params.get("user_id"):
        return str(params["user_id"])

    body = event.get("body")
    if body:
        try:
            data = json.loads(body)
        except json.JSONDecodeError:
            return None
        if isinstance(data, dict) and data.get("user_id"):
            return str(data["user_id"])
    return None


def _respond(event: dict[str, Any], status_code: int, result: dict[str, Any]) -> dict[str, Any]:
    # Return response for API Gateway
    if _is_api_gateway(event):
        return {
            "statusCode": status_code,
            "headers": {"Content-Type": "application/json", "Access-Control-Allow-Origin": "*"},
            "body": json.dumps(result),
        }

    # Return simple dict for EventBridge
    return result


def handler(event, context):
    """
    Lambda function handler.

    Args:
        event: Event data (from EventBridge or API Gateway)
        context: Lambda context object

    Returns:
        Response dict for API Gateway or sync result for EventBridge
    """
    logger.info(f"Lambda invoked: {json.dumps(event)}")

    user_id = _extract_user_id(event)
    if not user_id:
        return _respond(event, 400, {"status": "error", "message": "user_id is required"})

    try:
        source = build_workout_source()
        with source:
            engine = build_sync_engine(source)
            phase = engine.synchronize(user_id)
    except Exception as e:
        # Missing credentials or a Secrets Manager error before the sync could start
        logger.exception("Sync setup failed")
        result = {
            "status": "error",
            "phase": "failed",
            "runs_synced": 0,
            "message": f"Sync setup failed: {e}",
            "timestamp": datetime.now(UTC).isoformat(),
            "function_name": getattr(context, "function_name", None),
        }
        return _respond(event, 500, result)

    result = {
        "status": "error" if phase.is_failed else "success",
        "phase": str(phase),
        "runs_synced": phase.count,
        "message": str(phase.error) if phase.error else phase.message,
        "timestamp": datetime.now(UTC).isoformat(),
        "function_name": getattr(context, "function_name", None),
    }

    logger.info(f"Response: {result}")
    return _respond(event, 500 if phase.is_failed else 200, result)
