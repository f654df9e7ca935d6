"""Supabase (PostgREST) client for the rally results tables."""

import logging
from collections.abc import Iterable
from typing import Any

import httpx

from src.config.settings import Settings
from src.models.participant import ManualParticipant, RegisteredUser
from src.models.result import ChampionshipRally, RawResult
from src.models.team import RawMemberResult, TeamTotal
from src.persistence.exceptions import (
    StorageConnectionError,
    StorageNotFoundError,
    StorageParseError,
    StorageResponseError,
)
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

DEFAULT_TIMEOUT = 10.0


def in_filter(values: Iterable[str]) -> str:
    """Build a PostgREST in.(...) filter with quoted values."""
    quoted = ",".join(f'"{v}"' for v in sorted(set(values)))
    return f"in.({quoted})"


class SupabaseStore:
    """Read-only access to the results tables through the Supabase REST API."""

    def __init__(
        self,
        url: str,
        key: str,
        schema: str = "public",
        timeout: float = DEFAULT_TIMEOUT,
        settings: Settings | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize the store.

        Args:
            url: Supabase project URL
            key: Supabase API key (anon or service role)
            schema: Database schema exposed by PostgREST
            timeout: Request timeout in seconds
            settings: Settings for table names (defaults used if None)
            transport: Optional httpx transport (for testing)
        """
        if not url or not key:
            raise ValueError("Supabase URL and key must be configured")

        self.url = url.rstrip("/")
        self.key = key
        self.schema = schema
        self.timeout = timeout
        self.settings = settings or Settings()
        self._transport = transport
        self._client: httpx.Client | None = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.BaseTransport | None = None,
    ) -> "SupabaseStore":
        """Create a store from application settings."""
        return cls(
            url=settings.supabase_url,
            key=settings.supabase_key,
            schema=settings.supabase_schema,
            timeout=settings.request_timeout,
            settings=settings,
            transport=transport,
        )

    def __enter__(self) -> "SupabaseStore":
        """Context manager entry."""
        self._client = httpx.Client(
            base_url=f"{self.url}/rest/v1",
            timeout=self.timeout,
            headers=self._headers(),
            transport=self._transport,
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        if self._client:
            self._client.close()
            self._client = None

    @property
    def client(self) -> httpx.Client:
        """Get the HTTP client, raising if not initialized."""
        if self._client is None:
            raise RuntimeError("SupabaseStore must be used as context manager")
        return self._client

    def _headers(self) -> dict[str, str]:
        headers = {
            "apikey": self.key,
            "Authorization": f"Bearer {self.key}",
            "Accept": "application/json",
        }
        if self.schema and self.schema != "public":
            headers["Accept-Profile"] = self.schema
        return headers

    def select(self, table: str, params: dict[str, str]) -> list[dict[str, Any]]:
        """
        Run a select query against a table.

        Args:
            table: Table or view name
            params: PostgREST query parameters (select, filters, order)

        Returns:
            List of row dictionaries

        Raises:
            StorageConnectionError: On network errors
            StorageResponseError: On non-2xx responses
            StorageParseError: If the body is not a JSON list
        """
        logger.debug(f"GET {table} {params}")

        try:
            response = self.client.get(f"/{table}", params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise StorageResponseError(
                f"Query on {table} failed: {e.response.status_code} "
                f"{e.response.text[:200]}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise StorageConnectionError(f"Query on {table} failed: {e}") from e

        try:
            rows = response.json()
        except ValueError as e:
            raise StorageParseError(f"Invalid JSON from {table}") from e

        if not isinstance(rows, list):
            raise StorageParseError(
                f"Unexpected payload from {table}: {type(rows).__name__}"
            )
        return [row for row in rows if isinstance(row, dict)]

    def fetch_championship(self, championship_id: str) -> dict[str, Any]:
        """Fetch a championship's ID and name."""
        rows = self.select(
            self.settings.championships_table,
            {"select": "id,name", "id": f"eq.{championship_id}"},
        )
        if not rows:
            raise StorageNotFoundError(f"Championship not found: {championship_id}")
        return rows[0]

    def fetch_championship_rallies(
        self,
        championship_id: str,
    ) -> list[ChampionshipRally]:
        """Fetch the active rallies of a championship."""
        rows = self.select(
            self.settings.championship_rallies_table,
            {
                "select": "rally_id,round_number,rallies(name,competition_date)",
                "championship_id": f"eq.{championship_id}",
                "is_active": "eq.true",
            },
        )
        return normalize_rows(rows, normalize_championship_rally)

    def fetch_rally_results(self, rally_ids: Iterable[str]) -> list[RawResult]:
        """Fetch result rows for the given rallies."""
        rally_ids = list(rally_ids)
        if not rally_ids:
            return []
        rows = self.select(
            self.settings.rally_results_table,
            {
                "select": (
                    "rally_id,participant_name,user_id,manual_participant_id,"
                    "class_name,total_points,extra_points,class_position"
                ),
                "rally_id": in_filter(rally_ids),
            },
        )
        logger.info(f"Loaded {len(rows)} result rows for {len(rally_ids)} rallies")
        return normalize_rows(rows, normalize_rally_result)

    def fetch_users(self, user_ids: Iterable[str]) -> list[RegisteredUser]:
        """Fetch display names for registered users."""
        user_ids = list(user_ids)
        if not user_ids:
            return []
        rows = self.select(
            self.settings.users_table,
            {"select": "id,player_name,name", "id": in_filter(user_ids)},
        )
        return normalize_rows(rows, normalize_user)

    def fetch_manual_participants(
        self,
        participant_ids: Iterable[str],
    ) -> list[ManualParticipant]:
        """Fetch display names for linked manual participants."""
        participant_ids = list(participant_ids)
        if not participant_ids:
            return []
        rows = self.select(
            self.settings.manual_participants_table,
            {"select": "id,display_name", "id": in_filter(participant_ids)},
        )
        return normalize_rows(rows, normalize_manual_participant)

    def fetch_team_totals(self, rally_ids: Iterable[str]) -> list[TeamTotal]:
        """Fetch precomputed team totals for the given rallies."""
        rally_ids = list(rally_ids)
        if not rally_ids:
            return []
        rows = self.select(
            self.settings.team_totals_table,
            {"select": "*", "rally_id": in_filter(rally_ids)},
        )
        return normalize_rows(rows, normalize_team_total)

    def fetch_member_results(
        self,
        rally_id: str,
        team_ids: Iterable[str],
    ) -> list[RawMemberResult]:
        """Fetch team members' points for a rally."""
        team_ids = list(team_ids)
        if not team_ids:
            return []
        rows = self.select(
            self.settings.team_members_table,
            {
                "select": "*",
                "rally_id": f"eq.{rally_id}",
                "team_id": in_filter(team_ids),
            },
        )
        return normalize_rows(rows, normalize_member_result)
