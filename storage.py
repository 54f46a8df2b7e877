# Storage adapters for users and posts, backed by Flask-SQLAlchemy
import logging
from contextlib import contextmanager

from sqlalchemy import distinct
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from errors import Conflict, NotFound, StorageFailure
from identity import is_valid_id
from models import db, bcrypt, User, Post, Comment, Like, Follower

logger = logging.getLogger(__name__)


@contextmanager
def guarded(action):
    """Roll back and re-raise database errors as StorageFailure."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise StorageFailure(f"Failed to {action}") from exc


class IdentityStore:
    """User records and the follow edges between them."""

    def find(self, user_id):
        if not is_valid_id(user_id):
            return None
        with guarded("load user"):
            return db.session.get(User, user_id)

    def get(self, user_id):
        user = self.find(user_id)
        if user is None:
            raise NotFound("User not found.")
        return user

    def exists(self, user_id):
        return self.find(user_id) is not None

    def exists_by_email(self, email):
        with guarded("look up email"):
            return User.query.filter_by(email=email).first() is not None

    def create(self, first_name, last_name, email, password, profile_image=''):
        if self.exists_by_email(email):
            raise Conflict("User with that email already exists.")
        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=bcrypt.generate_password_hash(password).decode('utf-8'),
            profile_image=profile_image,
        )
        db.session.add(user)
        self.save(user)
        return user

    def verify_credentials(self, email, password):
        with guarded("look up email"):
            user = User.query.filter_by(email=email).first()
        if user and bcrypt.check_password_hash(user.password_hash, password):
            return user
        return None

    def save(self, user):
        try:
            db.session.commit()
        except IntegrityError as exc:
            db.session.rollback()
            raise Conflict("Email already registered.") from exc
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StorageFailure("Failed to save user") from exc

    # Follow edges

    def add_edge(self, follower_id, followed_id):
        """Insert the edge; returns False when it was already present."""
        with guarded("look up follow edge"):
            exists = Follower.query.filter_by(
                follower_user_id=follower_id,
                followed_user_id=followed_id
            ).first() is not None
        if exists:
            return False
        db.session.add(Follower(follower_user_id=follower_id, followed_user_id=followed_id))
        try:
            db.session.commit()
        except IntegrityError:
            # A concurrent request inserted the same edge first
            db.session.rollback()
            return False
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StorageFailure("Failed to save follow edge") from exc
        return True

    def remove_edge(self, follower_id, followed_id):
        """Delete the edge; returns False when there was nothing to delete."""
        with guarded("delete follow edge"):
            result = db.session.execute(
                db.delete(Follower).where(
                    Follower.follower_user_id == follower_id,
                    Follower.followed_user_id == followed_id,
                )
            )
            db.session.commit()
        return result.rowcount > 0

    def is_following(self, follower_id, followed_id):
        with guarded("look up follow edge"):
            return Follower.query.filter_by(
                follower_user_id=follower_id,
                followed_user_id=followed_id
            ).first() is not None

    def followers_of(self, user_id):
        with guarded("load followers"):
            return db.session.query(User)\
                .join(Follower, User.user_id == Follower.follower_user_id)\
                .filter(Follower.followed_user_id == user_id)\
                .order_by(Follower.follower_id)\
                .all()

    def following_of(self, user_id):
        with guarded("load following"):
            return db.session.query(User)\
                .join(Follower, User.user_id == Follower.followed_user_id)\
                .filter(Follower.follower_user_id == user_id)\
                .order_by(Follower.follower_id)\
                .all()

    def count_followers(self, user_id):
        with guarded("count followers"):
            return Follower.query.filter_by(followed_user_id=user_id).count()

    def count_following(self, user_id):
        with guarded("count following"):
            return Follower.query.filter_by(follower_user_id=user_id).count()

    def users_by_id(self, user_ids):
        if not user_ids:
            return {}
        with guarded("load users"):
            users = User.query.filter(User.user_id.in_(set(user_ids))).all()
        return {user.user_id: user for user in users}


class PostStore:
    """Post records, their like rows and their comment sequence.

    Counter columns are only ever changed with single UPDATE statements that
    compute the new value in the database, so concurrent writers never
    overwrite each other's increments.
    """

    def find(self, post_id):
        if not is_valid_id(post_id):
            return None
        with guarded("load post"):
            return db.session.get(Post, post_id)

    def get(self, post_id):
        post = self.find(post_id)
        if post is None:
            raise NotFound("Post not found.")
        return post

    def create(self, user_id, text, image='', video=''):
        post = Post(user_id=user_id, text=text, image=image or '', video=video or '')
        db.session.add(post)
        self.save(post)
        return post

    def save(self, post):
        with guarded("save post"):
            db.session.commit()

    def list(self, author_id=None):
        if author_id is not None and not is_valid_id(author_id):
            return []
        with guarded("load posts"):
            query = Post.query
            if author_id is not None:
                query = query.filter(Post.user_id == author_id)
            return query.order_by(Post.created_at.desc(), Post.post_id.desc()).all()

    # Likes

    def has_like(self, post_id, user_id):
        with guarded("look up like"):
            return Like.query.filter_by(post_id=post_id, user_id=user_id).first() is not None

    def add_like(self, post_id, user_id):
        """Insert the like row and bump the counter in one transaction.

        Returns False if another request inserted the same like first.
        """
        db.session.add(Like(post_id=post_id, user_id=user_id))
        try:
            db.session.flush()
            db.session.execute(
                db.update(Post)
                .where(Post.post_id == post_id)
                .values(like_count=Post.like_count + 1)
            )
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            return False
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StorageFailure("Failed to save like") from exc
        return True

    def remove_like(self, post_id, user_id):
        """Delete the like row and decrement the counter, clamped at zero.

        Returns False if the like was already gone.
        """
        with guarded("delete like"):
            result = db.session.execute(
                db.delete(Like).where(Like.post_id == post_id, Like.user_id == user_id)
            )
            if result.rowcount == 0:
                db.session.rollback()
                return False
            db.session.execute(
                db.update(Post)
                .where(Post.post_id == post_id, Post.like_count > 0)
                .values(like_count=Post.like_count - 1)
            )
            db.session.commit()
        return True

    def liked_by(self, post_id):
        """Ids of the users who like the post, in the order they liked it."""
        with guarded("load likes"):
            rows = db.session.query(Like.user_id)\
                .filter(Like.post_id == post_id)\
                .order_by(Like.like_id)\
                .all()
        return [user_id for (user_id,) in rows]

    def liked_by_many(self, post_ids):
        if not post_ids:
            return {}
        result = {post_id: [] for post_id in post_ids}
        with guarded("load likes"):
            rows = db.session.query(Like.post_id, Like.user_id)\
                .filter(Like.post_id.in_(post_ids))\
                .order_by(Like.like_id)\
                .all()
        for post_id, user_id in rows:
            result[post_id].append(user_id)
        return result

    def like_count(self, post_id):
        with guarded("load like count"):
            return db.session.query(Post.like_count).filter(Post.post_id == post_id).scalar()

    # Shares

    def increment_share(self, post_id):
        with guarded("record share"):
            db.session.execute(
                db.update(Post)
                .where(Post.post_id == post_id)
                .values(share_count=Post.share_count + 1)
            )
            db.session.commit()
            return db.session.query(Post.share_count).filter(Post.post_id == post_id).scalar()

    # Comments

    def append_comment(self, post_id, user_id, text):
        comment = Comment(post_id=post_id, user_id=user_id, text=text)
        db.session.add(comment)
        with guarded("save comment"):
            db.session.commit()
        return comment

    def comments(self, post_id):
        with guarded("load comments"):
            return Comment.query.filter_by(post_id=post_id)\
                .order_by(Comment.comment_id.asc())\
                .all()

    def comment_counts(self, post_ids):
        if not post_ids:
            return {}
        with guarded("count comments"):
            rows = db.session.query(Comment.post_id, db.func.count(distinct(Comment.comment_id)))\
                .filter(Comment.post_id.in_(post_ids))\
                .group_by(Comment.post_id)\
                .all()
        counts = {post_id: 0 for post_id in post_ids}
        counts.update({post_id: int(count) for post_id, count in rows})
        return counts
