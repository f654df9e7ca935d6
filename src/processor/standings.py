"""Load results from storage and build standings."""

import logging

from src.models.result import RallyResults
from src.models.standings import ChampionshipStandings
from src.models.team import (
    TEAM_CONTRIBUTOR_COUNT,
    TeamChampionshipStandings,
    TeamRallyResult,
)
from src.persistence.store import ResultsStore
from src.processor.championship import aggregate_championship
from src.processor.rally_results import rank_rally
from src.processor.team_results import aggregate_team_championship, aggregate_team_rally

logger = logging.getLogger(__name__)


class StandingsBuilder:
    """
    Fetch a fresh snapshot from storage and compute standings from it.

    Nothing is cached between calls; storage errors propagate unchanged.
    """

    def __init__(
        self,
        store: ResultsStore,
        contributor_count: int = TEAM_CONTRIBUTOR_COUNT,
    ):
        """
        Initialize the builder.

        Args:
            store: Storage collaborator
            contributor_count: Members counted towards a team total
        """
        self.store = store
        self.contributor_count = contributor_count

    def championship_standings(self, championship_id: str) -> ChampionshipStandings:
        """
        Build individual championship standings.

        Args:
            championship_id: Championship ID

        Returns:
            ChampionshipStandings grouped by class
        """
        championship = self.store.fetch_championship(championship_id)
        rallies = self.store.fetch_championship_rallies(championship_id)
        results = self.store.fetch_rally_results(r.rally_id for r in rallies)

        user_ids = {r.user_id for r in results if r.user_id}
        manual_ids = {
            r.manual_participant_id for r in results if r.manual_participant_id
        }
        users = self.store.fetch_users(user_ids)
        manual_participants = self.store.fetch_manual_participants(manual_ids)

        logger.info(
            f"Building championship {championship_id}: {len(rallies)} rallies, "
            f"{len(results)} results, {len(users)} users"
        )

        return aggregate_championship(
            championship_id,
            rallies,
            results,
            users=users,
            manual_participants=manual_participants,
            championship_name=championship.get("name"),
        )

    def rally_results(self, rally_id: str) -> RallyResults:
        """Build class positions for a single rally."""
        results = self.store.fetch_rally_results([rally_id])
        users = self.store.fetch_users({r.user_id for r in results if r.user_id})
        manual_participants = self.store.fetch_manual_participants(
            {r.manual_participant_id for r in results if r.manual_participant_id}
        )
        return rank_rally(rally_id, results, users, manual_participants)

    def team_rally_results(
        self,
        rally_id: str,
        class_id: str | None = None,
    ) -> list[TeamRallyResult]:
        """
        Build team results for a rally.

        Args:
            rally_id: Rally ID
            class_id: Restrict to one class, or None for all classes

        Returns:
            Ranked team results
        """
        totals = self.store.fetch_team_totals([rally_id])
        if not totals:
            return []

        members = self.store.fetch_member_results(rally_id, {t.team_id for t in totals})
        users = self.store.fetch_users(
            {m.user_id for m in members if not m.player_name}
        )

        return aggregate_team_rally(
            rally_id,
            class_id,
            totals,
            members,
            users=users,
            contributor_count=self.contributor_count,
        )

    def team_championship_standings(
        self,
        championship_id: str,
    ) -> TeamChampionshipStandings:
        """Build team championship standings."""
        rallies = self.store.fetch_championship_rallies(championship_id)
        totals = self.store.fetch_team_totals(r.rally_id for r in rallies)
        return aggregate_team_championship(championship_id, rallies, totals)
