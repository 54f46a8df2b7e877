# Feed assembly: posts joined with author identity and engagement counts
import logging
from datetime import datetime
from typing import Optional

from engagement import CommentView, comment_views
from errors import InvalidArgument
from identity import UserId, View

logger = logging.getLogger(__name__)


class FeedEntry(View):
    """One post as shown in a feed. Carries the comment count, not the comments."""
    id: int
    user_id: UserId
    user_name: str
    user_avatar: str
    text: str
    image: str
    video: str
    likes: int
    liked_by: list[UserId]
    shares: int
    comments: int
    created_at: datetime


class PostDetail(View):
    id: int
    user_id: UserId
    user_name: str
    user_avatar: str
    text: str
    image: str
    video: str
    likes: int
    liked_by: list[UserId]
    shares: int
    comments: list[CommentView]
    created_at: datetime


def _author_fields(author):
    if author is None:
        return {"user_name": '', "user_avatar": ''}
    return {"user_name": author.full_name, "user_avatar": author.profile_image or ''}


class FeedAssembler:
    def __init__(self, posts, identity):
        self.posts = posts
        self.identity = identity

    def create_post(self, author_id, text, image='', video=''):
        if not text or not text.strip():
            raise InvalidArgument("Post text is required.")
        self.identity.get(author_id)
        post = self.posts.create(author_id, text, image=image, video=video)
        logger.info("User %s created post %s", author_id, post.post_id)
        return self.get_post(post.post_id)

    def list_posts(self, author_id: Optional[UserId] = None) -> list[FeedEntry]:
        """Newest first; posts with equal timestamps keep newest-inserted first."""
        posts = self.posts.list(author_id=author_id)
        if not posts:
            return []

        post_ids = [post.post_id for post in posts]
        authors = self.identity.users_by_id([post.user_id for post in posts])
        liked_by = self.posts.liked_by_many(post_ids)
        comment_counts = self.posts.comment_counts(post_ids)

        return [
            FeedEntry(
                id=post.post_id,
                user_id=post.user_id,
                text=post.text,
                image=post.image or '',
                video=post.video or '',
                likes=post.like_count,
                liked_by=liked_by[post.post_id],
                shares=post.share_count,
                comments=comment_counts[post.post_id],
                created_at=post.created_at,
                **_author_fields(authors.get(post.user_id)),
            )
            for post in posts
        ]

    def get_post(self, post_id) -> PostDetail:
        post = self.posts.get(post_id)
        comments = self.posts.comments(post_id)
        users = self.identity.users_by_id(
            [post.user_id] + [comment.user_id for comment in comments])

        return PostDetail(
            id=post.post_id,
            user_id=post.user_id,
            text=post.text,
            image=post.image or '',
            video=post.video or '',
            likes=post.like_count,
            liked_by=self.posts.liked_by(post_id),
            shares=post.share_count,
            comments=comment_views(comments, users),
            created_at=post.created_at,
            **_author_fields(users.get(post.user_id)),
        )
