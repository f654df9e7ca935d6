"""Local JSON snapshot of the results tables."""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from src.models.participant import ManualParticipant, RegisteredUser
from src.models.result import ChampionshipRally, RawResult
from src.models.team import RawMemberResult, TeamTotal
from src.persistence.exceptions import StorageNotFoundError, StorageParseError
from src.persistence.normalize import (
    normalize_championship_rally,
    normalize_manual_participant,
    normalize_member_result,
    normalize_rally_result,
    normalize_rows,
    normalize_team_total,
    normalize_user,
)

logger = logging.getLogger(__name__)

SNAPSHOT_TABLES = (
    "championships",
    "championship_rallies",
    "rally_results",
    "users",
    "manual_participants",
    "team_rally_totals",
    "team_rally_results",
)


class SnapshotStore:
    """
    Serve the results tables from a JSON export.

    The file holds one list of rows per table, keyed by table name, in the
    same shape the REST API returns (joined relations included).
    """

    def __init__(self, tables: dict[str, list[dict[str, Any]]]):
        """
        Initialize the store.

        Args:
            tables: Mapping of table name to rows
        """
        self.tables = {name: list(tables.get(name, [])) for name in SNAPSHOT_TABLES}

    @classmethod
    def from_file(cls, path: str | Path) -> "SnapshotStore":
        """
        Load a snapshot from a JSON file.

        Raises:
            FileNotFoundError: If the file does not exist
            StorageParseError: If the file is not a JSON object
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Snapshot file not found: {path}")

        with path.open(encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise StorageParseError(f"Invalid snapshot JSON: {path}") from e

        if not isinstance(data, dict):
            raise StorageParseError(f"Snapshot must be a JSON object: {path}")

        logger.info(
            f"Loaded snapshot {path}: "
            + ", ".join(f"{len(data.get(t, []))} {t}" for t in SNAPSHOT_TABLES)
        )
        return cls(data)

    def __enter__(self) -> "SnapshotStore":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        return None

    def fetch_championship(self, championship_id: str) -> dict[str, Any]:
        """Fetch a championship's ID and name."""
        for row in self.tables["championships"]:
            if str(row.get("id")) == championship_id:
                return row
        raise StorageNotFoundError(f"Championship not found: {championship_id}")

    def fetch_championship_rallies(
        self,
        championship_id: str,
    ) -> list[ChampionshipRally]:
        """Fetch the active rallies of a championship."""
        rows = [
            row
            for row in self.tables["championship_rallies"]
            if str(row.get("championship_id")) == championship_id
            and row.get("is_active", True)
        ]
        return normalize_rows(rows, normalize_championship_rally)

    def fetch_rally_results(self, rally_ids: Iterable[str]) -> list[RawResult]:
        """Fetch result rows for the given rallies."""
        wanted = set(rally_ids)
        rows = [r for r in self.tables["rally_results"] if str(r["rally_id"]) in wanted]
        return normalize_rows(rows, normalize_rally_result)

    def fetch_users(self, user_ids: Iterable[str]) -> list[RegisteredUser]:
        """Fetch display names for registered users."""
        wanted = set(user_ids)
        rows = [r for r in self.tables["users"] if str(r["id"]) in wanted]
        return normalize_rows(rows, normalize_user)

    def fetch_manual_participants(
        self,
        participant_ids: Iterable[str],
    ) -> list[ManualParticipant]:
        """Fetch display names for linked manual participants."""
        wanted = set(participant_ids)
        rows = [r for r in self.tables["manual_participants"] if str(r["id"]) in wanted]
        return normalize_rows(rows, normalize_manual_participant)

    def fetch_team_totals(self, rally_ids: Iterable[str]) -> list[TeamTotal]:
        """Fetch precomputed team totals for the given rallies."""
        wanted = set(rally_ids)
        rows = [
            r for r in self.tables["team_rally_totals"] if str(r["rally_id"]) in wanted
        ]
        return normalize_rows(rows, normalize_team_total)

    def fetch_member_results(
        self,
        rally_id: str,
        team_ids: Iterable[str],
    ) -> list[RawMemberResult]:
        """Fetch team members' points for a rally."""
        wanted = set(team_ids)
        rows = [
            r
            for r in self.tables["team_rally_results"]
            if str(r["rally_id"]) == rally_id and str(r["team_id"]) in wanted
        ]
        return normalize_rows(rows, normalize_member_result)
