# Identity reference: the user id type and the public projections of a user
from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Opaque to the core; the identity store assigns it
UserId = int

# Largest value a signed 64-bit id column holds
MAX_ID = 2 ** 63 - 1


def is_valid_id(value):
    return isinstance(value, int) and 1 <= value <= MAX_ID


class View(BaseModel):
    """Read-only projection rendered as camelCase JSON."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_json(self):
        return self.model_dump(mode='json', by_alias=True)


class UserSummary(View):
    """Display-safe subset of a user, used wherever a user is embedded."""
    id: UserId
    first_name: str
    last_name: str
    profile_image: str

    @classmethod
    def from_user(cls, user):
        return cls(
            id=user.user_id,
            first_name=user.first_name,
            last_name=user.last_name,
            profile_image=user.profile_image or '',
        )


class UserDetail(UserSummary):
    email: str
    bio: str
    location: str
    website: str
    created_at: datetime

    @classmethod
    def from_user(cls, user):
        return cls(
            id=user.user_id,
            first_name=user.first_name,
            last_name=user.last_name,
            profile_image=user.profile_image or '',
            email=user.email,
            bio=user.bio or '',
            location=user.location or '',
            website=user.website or '',
            created_at=user.created_at,
        )
