# Profile views: a user joined with its live relationship state
from typing import Optional

from identity import UserDetail, UserId, UserSummary


class ProfileView(UserDetail):
    followers: list[UserSummary]
    following: list[UserSummary]
    followers_count: int
    following_count: int
    is_following: bool


class ProfileViewComposer:
    def __init__(self, identity):
        self.identity = identity

    def get_profile_view(self, user_id: UserId, viewer_id: Optional[UserId] = None) -> ProfileView:
        """Build the profile of ``user_id`` as seen by ``viewer_id``.

        Counts come from the follow edges at read time. A user never counts
        as following themselves, so ``is_following`` is False when the viewer
        is absent or is the profile owner.
        """
        user = self.identity.get(user_id)
        followers = self.identity.followers_of(user_id)
        following = self.identity.following_of(user_id)

        is_following = False
        if viewer_id is not None and viewer_id != user_id:
            is_following = any(follower.user_id == viewer_id for follower in followers)

        return ProfileView(
            **UserDetail.from_user(user).model_dump(),
            followers=[UserSummary.from_user(follower) for follower in followers],
            following=[UserSummary.from_user(followed) for followed in following],
            followers_count=len(followers),
            following_count=len(following),
            is_following=is_following,
        )
