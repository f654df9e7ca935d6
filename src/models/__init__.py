"""Data models for rally championship scoring."""

from src.models.participant import (
    UNKNOWN_PLAYER,
    ManualLinkedParticipant,
    ManualParticipant,
    ManualUnlinkedParticipant,
    Participant,
    RegisteredParticipant,
    RegisteredUser,
    UserDirectory,
)
from src.models.result import (
    ChampionshipRally,
    ClassStatistics,
    RallyClassResult,
    RallyEntry,
    RallyResults,
    RallyScore,
    RawResult,
)
from src.models.standings import ChampionshipStandings, ClassStanding, ClassStandings
from src.models.team import (
    TEAM_CONTRIBUTOR_COUNT,
    MemberContribution,
    RawMemberResult,
    Team,
    TeamChampionshipStanding,
    TeamChampionshipStandings,
    TeamRallyPoints,
    TeamRallyResult,
    TeamTotal,
)

__all__ = [  # noqa: RUF022
    # Participant models
    "Participant",
    "RegisteredParticipant",
    "ManualLinkedParticipant",
    "ManualUnlinkedParticipant",
    "RegisteredUser",
    "ManualParticipant",
    "UserDirectory",
    "UNKNOWN_PLAYER",
    # Result models
    "RawResult",
    "ChampionshipRally",
    "RallyScore",
    "RallyEntry",
    "RallyClassResult",
    "RallyResults",
    "ClassStatistics",
    # Standings models
    "ClassStanding",
    "ClassStandings",
    "ChampionshipStandings",
    # Team models
    "Team",
    "TeamTotal",
    "RawMemberResult",
    "MemberContribution",
    "TeamRallyResult",
    "TeamRallyPoints",
    "TeamChampionshipStanding",
    "TeamChampionshipStandings",
    "TEAM_CONTRIBUTOR_COUNT",
]
