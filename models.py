# Database models
from datetime import datetime, timezone

from flask_bcrypt import Bcrypt
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
bcrypt = Bcrypt()


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Follower(db.Model):
    """One follow edge: follower_user_id follows followed_user_id."""
    __tablename__ = 'Followers'
    follower_id = db.Column(db.Integer, primary_key=True)
    follower_user_id = db.Column(db.Integer, db.ForeignKey('Users.user_id'), nullable=False, index=True)
    followed_user_id = db.Column(db.Integer, db.ForeignKey('Users.user_id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=utcnow)

    __table_args__ = (
        db.UniqueConstraint('follower_user_id', 'followed_user_id', name='uq_follow_edge'),
        db.CheckConstraint('follower_user_id <> followed_user_id', name='ck_no_self_follow'),
    )

class User(db.Model):
    __tablename__ = 'Users'
    user_id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    profile_image = db.Column(db.String(255), nullable=False, default='')
    bio = db.Column(db.Text, nullable=False, default='')
    location = db.Column(db.String(255), nullable=False, default='')
    website = db.Column(db.String(255), nullable=False, default='')
    created_at = db.Column(db.DateTime, default=utcnow)

    posts = db.relationship('Post', backref='author', lazy='dynamic')

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

class Post(db.Model):
    __tablename__ = 'Posts'
    post_id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('Users.user_id'), nullable=False, index=True)
    text = db.Column(db.Text, nullable=False)
    image = db.Column(db.String(255), nullable=False, default='')
    video = db.Column(db.String(255), nullable=False, default='')
    like_count = db.Column(db.Integer, nullable=False, default=0)
    share_count = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=utcnow, index=True)

    comments = db.relationship('Comment', backref='post', lazy='dynamic',
                               order_by='Comment.comment_id')
    likes = db.relationship('Like', backref='post', lazy='dynamic')

    __table_args__ = (
        db.CheckConstraint('like_count >= 0', name='ck_like_count_non_negative'),
        db.CheckConstraint('share_count >= 0', name='ck_share_count_non_negative'),
    )

class Comment(db.Model):
    __tablename__ = 'Comments'
    comment_id = db.Column(db.Integer, primary_key=True)
    post_id = db.Column(db.Integer, db.ForeignKey('Posts.post_id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('Users.user_id'), nullable=False)
    text = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    author = db.relationship('User')

class Like(db.Model):
    __tablename__ = 'Likes'
    like_id = db.Column(db.Integer, primary_key=True)
    post_id = db.Column(db.Integer, db.ForeignKey('Posts.post_id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('Users.user_id'), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    __table_args__ = (
        db.UniqueConstraint('post_id', 'user_id', name='uq_like_post_user'),
    )
