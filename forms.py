# Request validation: turns loosely typed request bodies into typed arguments
import re
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel

from identity import MAX_ID

EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# Row ids as the database can store them
Id = Annotated[int, Field(ge=1, le=MAX_ID)]


def validate_email(email):
    return bool(email) and EMAIL_RE.match(email) is not None


def validate_password(password):
    return bool(password) and len(password.encode('utf-8')) <= MAX_PASSWORD_BYTES


class Form(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='ignore')


class SignupForm(Form):
    first_name: NonEmptyStr
    last_name: NonEmptyStr
    email: NonEmptyStr
    password: str

    @field_validator('email')
    @classmethod
    def check_email(cls, value):
        if not validate_email(value):
            raise ValueError("Invalid email format")
        return value.lower()

    @field_validator('password')
    @classmethod
    def check_password(cls, value):
        if not validate_password(value):
            raise ValueError("Password does not meet requirements")
        return value


class LoginForm(Form):
    email: NonEmptyStr
    password: str

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value):
        return value.lower()

    @field_validator('password')
    @classmethod
    def check_password(cls, value):
        # Compared exactly as given at signup, surrounding spaces included
        if not value:
            raise ValueError("Password is required")
        return value


class ProfileUpdateForm(Form):
    user_id: Id
    first_name: Optional[NonEmptyStr] = None
    last_name: Optional[NonEmptyStr] = None
    email: Optional[NonEmptyStr] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None

    @field_validator('email')
    @classmethod
    def check_email(cls, value):
        if value is not None and not validate_email(value):
            raise ValueError("Invalid email format")
        return value.lower() if value is not None else None

    def changes(self):
        """Fields the caller actually sent, keyed by model attribute name."""
        return self.model_dump(exclude={'user_id'}, exclude_none=True)


class FollowForm(Form):
    user_id: Id
    target_id: Id


class PostForm(Form):
    user_id: Id
    text: NonEmptyStr


class LikeForm(Form):
    post_id: Id
    user_id: Id


class CommentForm(Form):
    post_id: Id
    user_id: Id
    comment_text: str


class ShareForm(Form):
    post_id: Id
    user_id: Optional[Id] = None


class ProfileQuery(Form):
    my_id: Optional[Id] = None


class PostsQuery(Form):
    user_id: Optional[Id] = None


def parse_request(form_class, req):
    """Validate a JSON or multipart request body against ``form_class``."""
    if req.form:
        data = req.form.to_dict()
    else:
        data = req.get_json(silent=True) or {}
    return form_class.model_validate(data)


def parse_query(form_class, req):
    data = {key: value for key, value in req.args.items() if value != ''}
    return form_class.model_validate(data)
