"""Lambda handler for recomputing standings and publishing them to S3."""

import json
import logging

import boto3

from src.config.settings import Settings, get_settings
from src.persistence.supabase import SupabaseStore
from src.processor.output import (
    championship_payload,
    rally_payload,
    team_championship_payload,
    team_rally_payload,
)
from src.processor.standings import StandingsBuilder

logger = logging.getLogger()
logger.setLevel(logging.INFO)

_s3_client = None


def get_s3_client():
    """Lazy-load S3 client."""
    global _s3_client
    if _s3_client is None:
        _s3_client = boto3.client("s3")
    return _s3_client


def publish_json(payload: dict, bucket: str, key: str, s3_client=None) -> str:
    """
    Upload a JSON payload to S3.

    Args:
        payload: JSON-serialisable dictionary
        bucket: Target bucket
        key: Object key
        s3_client: Optional boto3 S3 client (for testing)

    Returns:
        s3:// URI of the uploaded object
    """
    client = s3_client or get_s3_client()
    client.put_object(
        Bucket=bucket,
        Key=key,
        Body=json.dumps(payload, indent=2, default=str),
        ContentType="application/json",
    )
    logger.info(f"Published s3://{bucket}/{key}")
    return f"s3://{bucket}/{key}"


def build_payloads(event: dict, builder: StandingsBuilder) -> dict[str, dict]:
    """
    Compute every payload requested by the event.

    Args:
        event: Lambda event with championship_id, team_championship_id,
            rally_id and/or team_rally_id
        builder: Standings builder bound to a store

    Returns:
        Mapping of object name to payload
    """
    payloads: dict[str, dict] = {}

    if championship_id := event.get("championship_id"):
        standings = builder.championship_standings(str(championship_id))
        payloads[f"championship_{championship_id}.json"] = championship_payload(
            standings
        )

    if team_championship_id := event.get("team_championship_id"):
        team_standings = builder.team_championship_standings(str(team_championship_id))
        payloads[f"team_championship_{team_championship_id}.json"] = (
            team_championship_payload(team_standings)
        )

    if rally_id := event.get("rally_id"):
        payloads[f"rally_{rally_id}.json"] = rally_payload(
            builder.rally_results(str(rally_id))
        )

    if team_rally_id := event.get("team_rally_id"):
        team_results = builder.team_rally_results(
            str(team_rally_id), event.get("class_id")
        )
        payloads[f"team_rally_{team_rally_id}.json"] = team_rally_payload(
            str(team_rally_id), team_results
        )

    return payloads


def handler(  # noqa: ARG001
    event,
    context,
    settings: Settings | None = None,
    s3_client=None,
):
    """
    Lambda handler for recomputing standings.

    Invoked after results are approved, with the IDs to rebuild in the event.
    """
    logger.info("Starting standings processing")
    logger.info(f"Event: {json.dumps(event)}")

    settings = settings or get_settings()
    if settings.debug:
        logger.setLevel(logging.DEBUG)

    if not settings.output_bucket:
        raise ValueError("OUTPUT_BUCKET must be configured")

    try:
        with SupabaseStore.from_settings(settings) as store:
            builder = StandingsBuilder(
                store, contributor_count=settings.team_contributor_count
            )
            payloads = build_payloads(event, builder)

        published = []
        for name, payload in payloads.items():
            key = f"{settings.output_prefix}/{name}"
            if settings.dry_run:
                logger.info(f"Dry run, skipping upload of {key}")
                continue
            published.append(
                publish_json(payload, settings.output_bucket, key, s3_client)
            )

        return {
            "statusCode": 200,
            "body": json.dumps(
                {
                    "message": "Success",
                    "payloads_built": len(payloads),
                    "published": published,
                }
            ),
        }

    except Exception as e:
        logger.exception(f"Error processing standings: {e}")
        return {
            "statusCode": 500,
            "body": json.dumps({"error": str(e)}),
        }
