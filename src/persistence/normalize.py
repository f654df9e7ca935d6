"""Map joined storage rows onto the flat scoring models."""

import logging
from typing import Any

from src.models.participant import ManualParticipant, RegisteredUser
from src.models.result import ChampionshipRally, RawResult
from src.models.team import RawMemberResult, TeamTotal

logger = logging.getLogger(__name__)


def _unwrap(value: Any) -> dict:
    """Joined relations arrive as an object, a one-element list or null."""
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, dict):
        return value
    return {}


def _as_id(value: Any) -> str | None:
    """Normalize an ID column; empty values become None."""
    if value is None or value == "":
        return None
    return str(value)


def _as_points(value: Any) -> int:
    """Points columns may be null or numeric strings."""
    if value is None or value == "":
        return 0
    return max(int(float(value)), 0)


def _as_position(value: Any) -> int | None:
    if value is None or value == "":
        return None
    position = int(value)
    return position if position >= 1 else None


def normalize_rally_result(row: dict) -> RawResult:
    """
    Flatten a rally_results row.

    The class name is taken from the row, or from a joined game_classes
    relation when the row has none.

    Args:
        row: Row from the rally_results table, possibly with joins

    Returns:
        RawResult
    """
    class_name = row.get("class_name") or _unwrap(row.get("game_classes")).get("name")
    participant_name = row.get("participant_name") or ""

    return RawResult(
        rally_id=str(row["rally_id"]),
        user_id=_as_id(row.get("user_id")),
        manual_participant_id=_as_id(row.get("manual_participant_id")),
        participant_name=participant_name,
        class_name=class_name or "",
        total_points=_as_points(row.get("total_points")),
        extra_points=_as_points(row.get("extra_points")),
        class_position=_as_position(row.get("class_position")),
    )


def normalize_championship_rally(row: dict) -> ChampionshipRally:
    """Flatten a championship_rallies row with its joined rally."""
    rally = _unwrap(row.get("rallies"))
    competition_date = rally.get("competition_date") or row.get("competition_date")

    return ChampionshipRally(
        rally_id=str(row["rally_id"]),
        round_number=int(row["round_number"]),
        rally_name=rally.get("name") or row.get("rally_name") or "",
        competition_date=competition_date or None,
    )


def normalize_team_total(row: dict) -> TeamTotal:
    """Flatten a team_rally_totals row."""
    return TeamTotal(
        rally_id=str(row["rally_id"]),
        team_id=str(row["team_id"]),
        team_name=row.get("team_name") or _unwrap(row.get("teams")).get("name") or "",
        class_id=_as_id(row.get("class_id")),
        class_name=row.get("class_name") or "",
        team_total_points=_as_points(row.get("team_total_points")),
        participating_members=_as_points(row.get("participating_members")),
    )


def normalize_member_result(row: dict) -> RawMemberResult:
    """Flatten a team_rally_results row; overall points win over points."""
    user = _unwrap(row.get("users"))
    points = row.get("overall_points")
    if points is None:
        points = row.get("points")

    return RawMemberResult(
        team_id=str(row["team_id"]),
        team_name=row.get("team_name") or "",
        class_id=_as_id(row.get("class_id")),
        class_name=row.get("class_name") or "",
        user_id=str(row["user_id"]),
        player_name=row.get("player_name") or user.get("player_name"),
        points=_as_points(points),
    )


def normalize_user(row: dict) -> RegisteredUser:
    """Flatten a users row."""
    return RegisteredUser(
        id=str(row["id"]),
        player_name=row.get("player_name") or None,
        account_name=row.get("account_name") or row.get("name") or None,
    )


def normalize_manual_participant(row: dict) -> ManualParticipant:
    """Flatten a manual_participants row."""
    return ManualParticipant(
        id=str(row["id"]),
        display_name=row.get("display_name") or row.get("name") or None,
    )


def normalize_rows(rows: list[dict], normalizer) -> list:
    """
    Apply a normalizer to every row.

    Args:
        rows: Raw rows from storage
        normalizer: One of the normalize_* functions

    Returns:
        List of normalized models
    """
    normalized = [normalizer(row) for row in rows]
    logger.debug(f"Normalized {len(normalized)} rows with {normalizer.__name__}")
    return normalized
