"""The caller on whose behalf a write is performed."""

from dataclasses import dataclass

from cinecatalog.models.base import SYSTEM_ACTOR_ID


@dataclass(frozen=True)
class Actor:
    id: str
    role: str = "user"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


# Used for anonymous writes and scripts
SYSTEM_ACTOR = Actor(id=SYSTEM_ACTOR_ID, role="system")
