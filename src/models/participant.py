"""Participant identity models."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field, computed_field

UNKNOWN_PLAYER = "Unknown Player"


def escape_key_part(value: str) -> str:
    """Escape the key separator so distinct parts never produce equal keys."""
    return value.replace("\\", "\\\\").replace(":", "\\:")


class RegisteredUser(BaseModel):
    """Registered user account, as returned by the users lookup."""

    id: str = Field(..., description="User ID")
    player_name: str | None = Field(default=None, description="In-game name")
    account_name: str | None = Field(default=None, description="Account name")

    @property
    def display_name(self) -> str | None:
        """Player name, falling back to the account name."""
        return self.player_name or self.account_name or None


class ManualParticipant(BaseModel):
    """Manual participant record used to link results across rallies."""

    id: str = Field(..., description="Manual participant ID")
    display_name: str | None = Field(default=None)


class UserDirectory(BaseModel):
    """Lookup of registered users and manual participants by ID."""

    users: list[RegisteredUser] = Field(default_factory=list)
    manual_participants: list[ManualParticipant] = Field(default_factory=list)

    def get_user(self, user_id: str) -> RegisteredUser | None:
        """Find a registered user by ID."""
        for user in self.users:
            if user.id == user_id:
                return user
        return None

    def get_manual_participant(self, participant_id: str) -> ManualParticipant | None:
        """Find a manual participant by ID."""
        for participant in self.manual_participants:
            if participant.id == participant_id:
                return participant
        return None

    def player_names(self) -> dict[str, str]:
        """Map of user ID to display name, for users that have one."""
        return {
            user.id: user.display_name
            for user in self.users
            if user.display_name is not None
        }


class RegisteredParticipant(BaseModel):
    """Participant identified by a registered user account."""

    participant_type: Literal["registered"] = "registered"
    user_id: str
    display_name: str

    @computed_field
    @property
    def key(self) -> str:
        """Stable participant key."""
        return f"user:{self.user_id}"

    @property
    def is_linked(self) -> bool:
        return True


class ManualLinkedParticipant(BaseModel):
    """Participant identified by a manual participant record."""

    participant_type: Literal["manual_linked"] = "manual_linked"
    manual_participant_id: str
    display_name: str

    @computed_field
    @property
    def key(self) -> str:
        """Stable participant key."""
        return f"manual:{self.manual_participant_id}"

    @property
    def is_linked(self) -> bool:
        return True


class ManualUnlinkedParticipant(BaseModel):
    """Participant known only by the name and class typed into the results."""

    participant_type: Literal["manual_unlinked"] = "manual_unlinked"
    participant_name: str
    class_name: str

    @computed_field
    @property
    def key(self) -> str:
        """Name and class key, exact match only."""
        name = escape_key_part(self.participant_name)
        class_name = escape_key_part(self.class_name)
        return f"unlinked:{name}:{class_name}"

    @computed_field
    @property
    def display_name(self) -> str:
        """Free-text name from the results row."""
        return self.participant_name

    @property
    def is_linked(self) -> bool:
        return False


Participant = Annotated[
    RegisteredParticipant | ManualLinkedParticipant | ManualUnlinkedParticipant,
    Field(discriminator="participant_type"),
]
