"""Tests for likes, comments and shares."""

import pytest

from errors import Conflict, InvalidArgument, NotFound
from models import Like, Post, db
from storage import PostStore


@pytest.fixture
def author(make_user):
    return make_user(first_name="Alan", last_name="Turing")


@pytest.fixture
def post_id(make_post, author):
    return make_post(author)


class TestToggleLike:
    """Tests for EngagementLedger.toggle_like."""

    def test_like_then_unlike_restores_state(self, services, make_user, post_id):
        user = make_user()

        liked = services.engagement.toggle_like(post_id, user)
        unliked = services.engagement.toggle_like(post_id, user)

        assert liked.like_count == 1
        assert liked.liked_by == [user]
        assert unliked.like_count == 0
        assert unliked.liked_by == []

    def test_scenario_three_toggles(self, services, make_user, post_id):
        u1, u2 = make_user(), make_user()

        assert services.engagement.toggle_like(post_id, u1).like_count == 1
        assert services.engagement.toggle_like(post_id, u2).like_count == 2
        state = services.engagement.toggle_like(post_id, u1)

        assert state.like_count == 1
        assert state.liked_by == [u2]

    def test_count_matches_set_for_any_sequence(self, services, make_user, post_id):
        users = [make_user() for _ in range(3)]
        sequence = [0, 1, 2, 1, 0, 0, 2, 1, 1, 2]

        for index in sequence:
            state = services.engagement.toggle_like(post_id, users[index])
            assert state.like_count == len(state.liked_by)
            assert db.session.get(Post, post_id).like_count == Like.query.filter_by(post_id=post_id).count()

    def test_unknown_post(self, services, make_user):
        with pytest.raises(NotFound):
            services.engagement.toggle_like(999, make_user())

    def test_unknown_user(self, services, post_id):
        with pytest.raises(NotFound):
            services.engagement.toggle_like(post_id, 999)

        assert Like.query.count() == 0

    def test_duplicate_like_insert_does_not_double_count(self, services, make_user, post_id):
        user = make_user()
        posts = PostStore()

        assert posts.add_like(post_id, user) is True
        assert posts.add_like(post_id, user) is False

        assert posts.like_count(post_id) == 1
        assert posts.liked_by(post_id) == [user]

    def test_removing_missing_like_leaves_counter(self, services, make_user, post_id):
        posts = PostStore()

        assert posts.remove_like(post_id, make_user()) is False
        assert posts.like_count(post_id) == 0

    def test_counter_is_clamped_at_zero(self, services, make_user, post_id):
        user = make_user()
        db.session.add(Like(post_id=post_id, user_id=user))
        db.session.commit()

        state = services.engagement.toggle_like(post_id, user)

        assert state.like_count == 0
        assert state.liked_by == []

    def test_gives_up_after_repeated_races(self, services, make_user, post_id, monkeypatch):
        user = make_user()
        monkeypatch.setattr(services.engagement.posts, 'add_like', lambda post_id, user_id: False)

        with pytest.raises(Conflict):
            services.engagement.toggle_like(post_id, user)


class TestAddComment:
    """Tests for EngagementLedger.add_comment."""

    def test_appends_in_order(self, services, make_user, post_id):
        u1 = make_user(first_name="Edsger", last_name="Dijkstra")
        u2 = make_user()

        first = services.engagement.add_comment(post_id, u1, "first")
        second = services.engagement.add_comment(post_id, u2, "second")

        assert [c.text for c in first] == ["first"]
        assert [c.text for c in second] == ["first", "second"]
        assert second[0] == first[0]
        assert second[0].author.first_name == "Edsger"
        assert second[0].created_at <= second[1].created_at

    def test_duplicates_are_kept(self, services, make_user, post_id):
        user = make_user()

        services.engagement.add_comment(post_id, user, "same")
        comments = services.engagement.add_comment(post_id, user, "same")

        assert [c.text for c in comments] == ["same", "same"]

    @pytest.mark.parametrize("text", ["", "   "])
    def test_empty_text_rejected(self, services, make_user, post_id, text):
        with pytest.raises(InvalidArgument):
            services.engagement.add_comment(post_id, make_user(), text)

        assert services.engagement.comments(post_id) == []

    def test_unknown_post(self, services, make_user):
        with pytest.raises(NotFound):
            services.engagement.add_comment(999, make_user(), "hi")


class TestIncrementShare:
    """Tests for EngagementLedger.increment_share."""

    def test_each_call_counts(self, services, post_id):
        counts = [services.engagement.increment_share(post_id) for _ in range(4)]

        assert counts == [1, 2, 3, 4]

    def test_unknown_post(self, services):
        with pytest.raises(NotFound):
            services.engagement.increment_share(999)
