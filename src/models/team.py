"""Team and team scoring data models."""

from pydantic import BaseModel, Field

from src.models.participant import RegisteredParticipant

# Members per team whose points count towards the team total
TEAM_CONTRIBUTOR_COUNT = 3


class Team(BaseModel):
    """A team competing in one class."""

    id: str = Field(..., description="Team ID")
    name: str = Field(..., description="Team name")
    class_id: str | None = Field(default=None)
    class_name: str = Field(default="")
    members: list[RegisteredParticipant] = Field(default_factory=list)


class TeamTotal(BaseModel):
    """Precomputed team total for one rally, as stored upstream."""

    rally_id: str
    team_id: str
    team_name: str = Field(default="")
    class_id: str | None = Field(default=None)
    class_name: str = Field(default="")
    team_total_points: int = Field(default=0, ge=0)
    participating_members: int = Field(default=0, ge=0)

    @property
    def class_key(self) -> str:
        """Class grouping key, the class ID where known."""
        return self.class_id or self.class_name


class RawMemberResult(BaseModel):
    """A team member's points in one rally."""

    team_id: str
    team_name: str = Field(default="")
    class_id: str | None = Field(default=None)
    class_name: str = Field(default="")
    user_id: str
    player_name: str | None = Field(default=None)
    points: int = Field(default=0, ge=0)


class MemberContribution(BaseModel):
    """A member's points and whether they count for the team."""

    participant: RegisteredParticipant
    points: int = Field(default=0, ge=0)
    contributed: bool = Field(default=False)

    @property
    def player_name(self) -> str:
        return self.participant.display_name


class TeamRallyResult(BaseModel):
    """Team result for one rally and class."""

    rally_id: str
    team_id: str
    team_name: str = Field(default="")
    class_id: str | None = Field(default=None)
    class_name: str = Field(default="")
    members: list[MemberContribution] = Field(default_factory=list)
    total_points: int = Field(default=0, ge=0, description="Precomputed team total")
    contributor_points: int = Field(
        default=0,
        ge=0,
        description="Sum of the contributing members' points",
    )
    total_mismatch: bool = Field(
        default=False,
        description="Precomputed total differs from the contributors' sum",
    )
    team_position: int = Field(default=0, ge=0)  # Set after sorting

    @property
    def member_count(self) -> int:
        return len(self.members)

    @property
    def contributors(self) -> list[MemberContribution]:
        """Members whose points count for the team."""
        return [m for m in self.members if m.contributed]


class TeamRallyPoints(BaseModel):
    """A team's points in one championship round."""

    rally_id: str
    round_number: int = Field(..., ge=1)
    points: int = Field(default=0, ge=0)
    participated: bool = Field(default=False)


class TeamChampionshipStanding(BaseModel):
    """Team standing across a championship for one class."""

    team_id: str
    team_name: str = Field(default="")
    class_id: str | None = Field(default=None)
    class_name: str = Field(default="")
    rally_points: list[TeamRallyPoints] = Field(default_factory=list)
    total_points: int = Field(default=0, ge=0)
    rallies_scored: int = Field(default=0, ge=0)
    position: int = Field(default=0, ge=0)


class TeamChampionshipStandings(BaseModel):
    """Team championship standings, grouped by class."""

    championship_id: str
    total_rounds: int = Field(default=0, ge=0)
    classes: dict[str, list[TeamChampionshipStanding]] = Field(
        default_factory=dict,
        description="Standings keyed by class ID, or class name without one",
    )
    warnings: list[str] = Field(default_factory=list)

    def get_class(self, class_key: str) -> list[TeamChampionshipStanding]:
        """Standings for a class by ID or name, empty if the class is unknown."""
        if class_key in self.classes:
            return self.classes[class_key]
        for standings in self.classes.values():
            if standings and standings[0].class_name == class_key:
                return standings
        return []
