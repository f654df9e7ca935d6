"""Championship standings data models."""

from pydantic import BaseModel, Field, computed_field

from src.models.participant import Participant
from src.models.result import ChampionshipRally, RallyScore


class ClassStanding(BaseModel):
    """Championship standing for one participant in one class."""

    participant: Participant
    class_name: str = Field(..., description="Competition class name")
    rally_scores: list[RallyScore] = Field(
        default_factory=list,
        description="One entry per championship rally, in round order",
    )
    total_points: int = Field(default=0, ge=0)
    total_rally_points: int = Field(default=0, ge=0)
    total_extra_points: int = Field(default=0, ge=0)
    rounds_participated: int = Field(default=0, ge=0)
    championship_position: int = Field(default=0, ge=0)  # Set after sorting

    @computed_field
    @property
    def participant_key(self) -> str:
        """Key of the resolved participant."""
        return self.participant.key

    @computed_field
    @property
    def participant_name(self) -> str:
        """Display name of the resolved participant."""
        return self.participant.display_name

    @property
    def is_linked(self) -> bool:
        return self.participant.is_linked

    def get_round(self, round_number: int) -> RallyScore | None:
        """Get the score for a specific round."""
        for score in self.rally_scores:
            if score.round_number == round_number:
                return score
        return None


class ClassStandings(BaseModel):
    """Ranked championship standings for a single class."""

    class_name: str
    standings: list[ClassStanding] = Field(default_factory=list)

    @property
    def leader(self) -> ClassStanding | None:
        """Get the current class leader."""
        if self.standings:
            return self.standings[0]
        return None

    def get_by_participant_key(self, key: str) -> ClassStanding | None:
        """Find standing by participant key."""
        for standing in self.standings:
            if standing.participant_key == key:
                return standing
        return None


class ChampionshipStandings(BaseModel):
    """Complete championship standings, grouped by class."""

    championship_id: str
    championship_name: str | None = Field(default=None)
    rallies: list[ChampionshipRally] = Field(
        default_factory=list,
        description="Championship rallies in round order",
    )
    classes: list[ClassStandings] = Field(default_factory=list)
    linked_participants: int = Field(default=0, ge=0)
    unlinked_participants: int = Field(default=0, ge=0)
    warnings: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def total_rounds(self) -> int:
        """Number of rallies in the championship."""
        return len(self.rallies)

    @property
    def class_names(self) -> list[str]:
        """Class names in output order."""
        return [c.class_name for c in self.classes]

    def get_class(self, class_name: str) -> ClassStandings | None:
        """Get standings for a class by name."""
        for class_standings in self.classes:
            if class_standings.class_name == class_name:
                return class_standings
        return None

    def all_standings(self) -> list[ClassStanding]:
        """Every class standing, class by class."""
        return [s for c in self.classes for s in c.standings]
