# Engagement ledger: likes, comments and shares on a post
import logging
from datetime import datetime
from typing import Optional

from errors import Conflict, InvalidArgument
from identity import UserId, UserSummary, View

logger = logging.getLogger(__name__)


class LikeState(View):
    like_count: int
    liked_by: list[UserId]


class CommentView(View):
    user_id: UserId
    author: Optional[UserSummary]
    text: str
    created_at: datetime


def comment_views(comments, users):
    """Join comments with their authors, keeping sequence order."""
    views = []
    for comment in comments:
        author = users.get(comment.user_id)
        views.append(CommentView(
            user_id=comment.user_id,
            author=UserSummary.from_user(author) if author else None,
            text=comment.text,
            created_at=comment.created_at,
        ))
    return views


class EngagementLedger:
    def __init__(self, posts, identity, retry_limit=3):
        self.posts = posts
        self.identity = identity
        self.retry_limit = retry_limit

    def toggle_like(self, post_id, user_id):
        """Like the post if ``user_id`` hasn't yet, otherwise take the like back."""
        self.posts.get(post_id)
        self.identity.get(user_id)

        for attempt in range(1, self.retry_limit + 1):
            if self.posts.has_like(post_id, user_id):
                changed, action = self.posts.remove_like(post_id, user_id), 'unliked'
            else:
                changed, action = self.posts.add_like(post_id, user_id), 'liked'
            if changed:
                logger.info("User %s %s post %s", user_id, action, post_id)
                break
            logger.warning("Like on post %s by %s raced a concurrent write (attempt %d)",
                           post_id, user_id, attempt)
        else:
            raise Conflict("Post like is being updated concurrently, try again.")

        return LikeState(
            like_count=self.posts.like_count(post_id),
            liked_by=self.posts.liked_by(post_id),
        )

    def add_comment(self, post_id, user_id, text):
        if not text or not text.strip():
            raise InvalidArgument("Comment text is required.")
        self.posts.get(post_id)
        self.identity.get(user_id)

        self.posts.append_comment(post_id, user_id, text)
        logger.info("User %s commented on post %s", user_id, post_id)
        return self.comments(post_id)

    def comments(self, post_id):
        comments = self.posts.comments(post_id)
        users = self.identity.users_by_id([comment.user_id for comment in comments])
        return comment_views(comments, users)

    def increment_share(self, post_id):
        self.posts.get(post_id)
        share_count = self.posts.increment_share(post_id)
        logger.info("Post %s shared (%d total)", post_id, share_count)
        return share_count
