"""Tests for the follow relationship graph."""

import pytest

from errors import InvalidArgument, NotFound
from models import Follower


def edges(graph, user_id):
    followers = {summary.id for summary in graph.list_followers(user_id)}
    following = {summary.id for summary in graph.list_following(user_id)}
    return followers, following


class TestFollow:
    """Tests for RelationshipGraph.follow."""

    def test_follow_creates_both_sides(self, services, make_user):
        a, b = make_user(), make_user()

        services.graph.follow(a, b)

        _, a_following = edges(services.graph, a)
        b_followers, _ = edges(services.graph, b)
        assert b in a_following
        assert a in b_followers

    def test_follow_self_rejected(self, services, make_user):
        a = make_user()

        with pytest.raises(InvalidArgument):
            services.graph.follow(a, a)

        assert edges(services.graph, a) == (set(), set())

    def test_follow_self_rejected_even_for_unknown_user(self, services):
        with pytest.raises(InvalidArgument):
            services.graph.follow(999, 999)

    def test_follow_twice_is_idempotent(self, services, make_user):
        a, b = make_user(), make_user()

        services.graph.follow(a, b)
        services.graph.follow(a, b)

        assert Follower.query.filter_by(follower_user_id=a, followed_user_id=b).count() == 1
        assert [s.id for s in services.graph.list_followers(b)] == [a]

    @pytest.mark.parametrize("missing", ["actor", "target"])
    def test_follow_unknown_user(self, services, make_user, missing):
        existing = make_user()
        actor, target = (999, existing) if missing == "actor" else (existing, 999)

        with pytest.raises(NotFound):
            services.graph.follow(actor, target)

        assert Follower.query.count() == 0

    def test_follow_is_directional(self, services, make_user):
        a, b = make_user(), make_user()

        services.graph.follow(a, b)

        a_followers, _ = edges(services.graph, a)
        _, b_following = edges(services.graph, b)
        assert a_followers == set()
        assert b_following == set()


class TestUnfollow:
    """Tests for RelationshipGraph.unfollow."""

    def test_unfollow_removes_both_sides(self, services, make_user):
        a, b = make_user(), make_user()
        services.graph.follow(a, b)

        services.graph.unfollow(a, b)

        assert edges(services.graph, a) == (set(), set())
        assert edges(services.graph, b) == (set(), set())

    def test_unfollow_never_connected_is_noop(self, services, make_user):
        a, b, c = make_user(), make_user(), make_user()
        services.graph.follow(c, b)

        services.graph.unfollow(a, b)

        assert edges(services.graph, a) == (set(), set())
        assert edges(services.graph, b) == ({c}, set())

    def test_unfollow_self_is_permitted(self, services, make_user):
        a = make_user()

        services.graph.unfollow(a, a)

        assert edges(services.graph, a) == (set(), set())

    def test_unfollow_unknown_user(self, services, make_user):
        a = make_user()

        with pytest.raises(NotFound):
            services.graph.unfollow(a, 999)


class TestListings:
    """Tests for follower/following listings."""

    def test_summaries_exclude_credentials(self, services, make_user):
        a = make_user(first_name="Grace", last_name="Hopper")
        b = make_user()
        services.graph.follow(a, b)

        [summary] = services.graph.list_followers(b)
        data = summary.to_json()

        assert data == {"id": a, "firstName": "Grace", "lastName": "Hopper", "profileImage": ""}

    def test_listing_unknown_user(self, services):
        with pytest.raises(NotFound):
            services.graph.list_followers(999)
        with pytest.raises(NotFound):
            services.graph.list_following(999)

    def test_following_keeps_follow_order(self, services, make_user):
        a, b, c, d = make_user(), make_user(), make_user(), make_user()
        for target in (c, b, d):
            services.graph.follow(a, target)

        assert [s.id for s in services.graph.list_following(a)] == [c, b, d]


class TestOutOfRangeIds:
    """Ids past what an id column can hold resolve to no user."""

    def test_follow_oversized_id(self, services, make_user):
        a = make_user()

        with pytest.raises(NotFound):
            services.graph.follow(a, 10 ** 30)
        with pytest.raises(NotFound):
            services.graph.unfollow(10 ** 30, a)

    def test_lookups_oversized_id(self, services):
        with pytest.raises(NotFound):
            services.profiles.get_profile_view(10 ** 30)
        with pytest.raises(NotFound):
            services.feed.get_post(10 ** 30)
        assert services.feed.list_posts(author_id=10 ** 30) == []
