# Account lifecycle: signup, login and profile edits
import logging

from errors import Conflict, InvalidArgument
from identity import UserDetail

logger = logging.getLogger(__name__)


class Accounts:
    def __init__(self, identity):
        self.identity = identity

    def signup(self, first_name, last_name, email, password, profile_image=''):
        user = self.identity.create(first_name, last_name, email, password,
                                    profile_image=profile_image)
        logger.info("User %s signed up", user.user_id)
        return user.user_id

    def login(self, email, password):
        user = self.identity.verify_credentials(email, password)
        if user is None:
            raise InvalidArgument("Invalid credentials.")
        return user.user_id

    def update_profile(self, user_id, changes, profile_image=None):
        """Apply the given field changes; fields left out stay as they are."""
        user = self.identity.get(user_id)

        new_email = changes.get('email')
        if new_email and new_email != user.email and self.identity.exists_by_email(new_email):
            raise Conflict("Email already registered.")

        for field in ('first_name', 'last_name', 'email', 'bio', 'location', 'website'):
            if field in changes:
                setattr(user, field, changes[field])
        if profile_image:
            user.profile_image = profile_image

        self.identity.save(user)
        logger.info("User %s updated profile", user_id)
        return UserDetail.from_user(user)
