"""Pytest configuration and fixtures."""

import itertools

import pytest

from app import create_app
from models import db
from services import get_services


@pytest.fixture
def app(tmp_path):
    """Application on a fresh in-memory database."""
    app = create_app('testing', UPLOAD_FOLDER=str(tmp_path / 'uploads'))
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def services(app):
    return get_services()


@pytest.fixture
def make_user(services):
    """Factory creating users with unique emails, returning their ids."""
    counter = itertools.count(1)

    def _make_user(first_name="Ada", last_name="Lovelace", password="secret-pw"):
        n = next(counter)
        return services.accounts.signup(first_name, last_name, f"user{n}@example.com", password)

    return _make_user


@pytest.fixture
def make_post(services):
    """Factory creating posts, returning their ids."""
    def _make_post(author_id, text="hello world", image='', video=''):
        return services.feed.create_post(author_id, text, image=image, video=video).id

    return _make_post
