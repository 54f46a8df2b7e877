# Relationship graph: follow edges between users
import logging

from errors import InvalidArgument
from identity import UserSummary

logger = logging.getLogger(__name__)


class RelationshipGraph:
    """Follow/unfollow and follower listings.

    Each edge is visible from both ends: as ``following`` of the actor and as
    ``followers`` of the target. Both users must exist before an edge is
    touched.
    """

    def __init__(self, identity):
        self.identity = identity

    def follow(self, actor_id, target_id):
        if actor_id == target_id:
            raise InvalidArgument("You cannot follow yourself.")
        self.identity.get(actor_id)
        self.identity.get(target_id)

        if self.identity.add_edge(actor_id, target_id):
            logger.info("User %s followed %s", actor_id, target_id)
        else:
            logger.debug("User %s already follows %s", actor_id, target_id)

    def unfollow(self, actor_id, target_id):
        # No self guard here: unfollowing yourself is a harmless no-op
        self.identity.get(actor_id)
        self.identity.get(target_id)

        if self.identity.remove_edge(actor_id, target_id):
            logger.info("User %s unfollowed %s", actor_id, target_id)

    def list_followers(self, user_id):
        self.identity.get(user_id)
        return [UserSummary.from_user(user) for user in self.identity.followers_of(user_id)]

    def list_following(self, user_id):
        self.identity.get(user_id)
        return [UserSummary.from_user(user) for user in self.identity.following_of(user_id)]
