"""Rally result data models."""

from datetime import datetime

from pydantic import BaseModel, Field, computed_field


class RawResult(BaseModel):
    """Raw rally result row as stored by the results entry screens."""

    rally_id: str = Field(..., description="Rally ID")
    user_id: str | None = Field(default=None, description="Registered user ID")
    manual_participant_id: str | None = Field(
        default=None,
        description="Linked manual participant ID",
    )
    participant_name: str = Field(
        default="",
        description="Free-text participant name",
    )
    class_name: str = Field(..., description="Competition class name")
    total_points: int = Field(default=0, ge=0, description="Rally points")
    extra_points: int = Field(default=0, ge=0, description="Bonus points")
    class_position: int | None = Field(default=None, ge=1)

    @computed_field
    @property
    def overall_points(self) -> int:
        """Rally points plus bonus points."""
        return self.total_points + self.extra_points


class ChampionshipRally(BaseModel):
    """A rally's membership in a championship."""

    rally_id: str = Field(..., description="Rally ID")
    round_number: int = Field(..., ge=1, description="Round within the season")
    rally_name: str = Field(default="")
    competition_date: datetime | None = Field(default=None)


class RallyScore(BaseModel):
    """One championship round for a single class standing."""

    rally_id: str
    round_number: int = Field(..., ge=1)
    rally_name: str = Field(default="")
    rally_points: int = Field(default=0, ge=0)
    extra_points: int = Field(default=0, ge=0)
    points: int = Field(default=0, ge=0, description="Rally plus extra points")
    participated: bool = Field(default=False)
    class_position: int | None = Field(default=None)

    @computed_field
    @property
    def points_display(self) -> str:
        """Points for the results table, dash for a missed round."""
        if not self.participated:
            return "-"
        return str(self.points)


class RallyEntry(BaseModel):
    """A single participant entry while a rally's results are being ranked."""

    participant_id: str = Field(..., description="Participant or registration ID")
    player_name: str = Field(default="")
    class_name: str = Field(default="")
    total_points: int | None = Field(default=None, ge=0)
    participated: bool = Field(default=True)


class RallyClassResult(BaseModel):
    """Ranked outcome for a rally entry."""

    participant_id: str
    player_name: str = Field(default="")
    class_name: str
    total_points: int = Field(default=0, ge=0)
    participated: bool
    class_position: int | None = Field(default=None, description="None if absent")
    overall_position: int | None = Field(default=None, description="None if absent")


class RallyResults(BaseModel):
    """Ranked results of one rally, with data quality warnings."""

    rally_id: str
    results: list[RallyClassResult] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def total_participants(self) -> int:
        return sum(1 for r in self.results if r.participated)

    def get_class(self, class_name: str) -> list[RallyClassResult]:
        """Results for one class, in ranking order."""
        return [r for r in self.results if r.class_name == class_name]


class ClassStatistics(BaseModel):
    """Summary of the points scored within one class of a rally."""

    class_name: str
    count: int = Field(default=0, ge=0)
    with_results: int = Field(default=0, ge=0)
    average_points: float = Field(default=0.0, ge=0)
    highest_points: int = Field(default=0, ge=0)
    lowest_points: int = Field(default=0, ge=0)
