"""Storage collaborator interface."""

from collections.abc import Iterable
from typing import Any, Protocol

from src.models.participant import ManualParticipant, RegisteredUser
from src.models.result import ChampionshipRally, RawResult
from src.models.team import RawMemberResult, TeamTotal


class ResultsStore(Protocol):
    """Read operations the scoring engine needs from storage."""

    def fetch_championship(self, championship_id: str) -> dict[str, Any]: ...

    def fetch_championship_rallies(
        self,
        championship_id: str,
    ) -> list[ChampionshipRally]: ...

    def fetch_rally_results(self, rally_ids: Iterable[str]) -> list[RawResult]: ...

    def fetch_users(self, user_ids: Iterable[str]) -> list[RegisteredUser]: ...

    def fetch_manual_participants(
        self,
        participant_ids: Iterable[str],
    ) -> list[ManualParticipant]: ...

    def fetch_team_totals(self, rally_ids: Iterable[str]) -> list[TeamTotal]: ...

    def fetch_member_results(
        self,
        rally_id: str,
        team_ids: Iterable[str],
    ) -> list[RawMemberResult]: ...
