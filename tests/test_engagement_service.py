"""Tests for likes, follows, views, shares and comment likes."""

import asyncio

import pytest
from sqlalchemy import select, func

from clipgraph.db.dao import LikeDAO, FollowDAO, CounterDAO
from clipgraph.db.models import VideoLike, UserFollow
from clipgraph.exceptions import InvalidOperationError, NotFoundError
from clipgraph.services import engagement_service, comment_service, video_service
from tests.conftest import GraphFactory


async def count_rows(session, model):
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar()


async def run_in_own_session(session_factory, operation, *args):
    async with session_factory() as session:
        result = await operation(session, *args)
        await session.commit()
        return result


class TestLike:
    async def test_like_increments_video_and_owner(self, session, factory):
        owner = await factory.user()
        viewer = await factory.user()
        video = await factory.video(owner)

        state = await engagement_service.like(session, viewer.id, video.id)

        assert state.liked is True
        assert state.likes_count == 1
        assert await CounterDAO.get(session, "user", owner.id, "total_likes_received") == 1
        assert await LikeDAO.exists(session, viewer.id, video.id)

    async def test_like_twice_is_idempotent(self, session, factory):
        owner = await factory.user()
        viewer = await factory.user()
        video = await factory.video(owner)

        await engagement_service.like(session, viewer.id, video.id)
        state = await engagement_service.like(session, viewer.id, video.id)

        assert state.likes_count == 1
        assert await count_rows(session, VideoLike) == 1
        assert await CounterDAO.get(session, "user", owner.id, "total_likes_received") == 1

    async def test_unlike_twice_stays_at_floor(self, session, factory):
        owner = await factory.user()
        viewer = await factory.user()
        video = await factory.video(owner)

        await engagement_service.like(session, viewer.id, video.id)
        first = await engagement_service.unlike(session, viewer.id, video.id)
        second = await engagement_service.unlike(session, viewer.id, video.id)

        assert first.likes_count == 0
        assert second.liked is False
        assert second.likes_count == 0
        assert await CounterDAO.get(session, "user", owner.id, "total_likes_received") == 0

    async def test_concurrent_insert_treated_as_existing(self, session, factory, monkeypatch):
        owner = await factory.user()
        viewer = await factory.user()
        video = await factory.video(owner)
        await engagement_service.like(session, viewer.id, video.id)

        # Another request inserted the edge between the existence check and the insert
        async def never_exists(session, user_id, video_id):
            return False

        monkeypatch.setattr(LikeDAO, "exists", staticmethod(never_exists))

        state = await engagement_service.like(session, viewer.id, video.id)

        assert state.liked is True
        assert state.likes_count == 1
        assert await count_rows(session, VideoLike) == 1

    async def test_racing_likes_on_same_pair(self, session_factory):
        async with session_factory() as setup:
            factory = GraphFactory(setup)
            owner = await factory.user()
            viewer = await factory.user()
            video = await factory.video(owner)
            await setup.commit()

        states = await asyncio.gather(
            run_in_own_session(session_factory, engagement_service.like, viewer.id, video.id),
            run_in_own_session(session_factory, engagement_service.like, viewer.id, video.id),
        )

        assert [state.liked for state in states] == [True, True]
        async with session_factory() as check:
            assert await count_rows(check, VideoLike) == 1
            assert await CounterDAO.get(check, "video", video.id, "likes_count") == 1
            assert await CounterDAO.get(check, "user", owner.id, "total_likes_received") == 1

    async def test_like_missing_video(self, session, factory):
        viewer = await factory.user()
        with pytest.raises(NotFoundError) as exc_info:
            await engagement_service.like(session, viewer.id, "video_missing")
        assert exc_info.value.code == "VIDEO_NOT_FOUND"

    async def test_like_deleted_video(self, session, factory):
        owner = await factory.user()
        viewer = await factory.user()
        video = await factory.video(owner)
        await video_service.soft_delete_video(session, video.id)

        with pytest.raises(NotFoundError):
            await engagement_service.like(session, viewer.id, video.id)

    async def test_like_by_missing_user(self, session, factory):
        owner = await factory.user()
        video = await factory.video(owner)
        with pytest.raises(NotFoundError) as exc_info:
            await engagement_service.like(session, "user_missing", video.id)
        assert exc_info.value.code == "USER_NOT_FOUND"


class TestFollow:
    async def test_follow_updates_both_counters(self, session, factory):
        alice = await factory.user()
        bob = await factory.user()

        state = await engagement_service.follow(session, alice.id, bob.id)

        assert state.following is True
        assert state.followers_count == 1
        assert state.following_count == 1
        assert await FollowDAO.is_following(session, alice.id, bob.id)
        assert not await FollowDAO.is_following(session, bob.id, alice.id)

    async def test_follow_twice_is_idempotent(self, session, factory):
        alice = await factory.user()
        bob = await factory.user()

        await engagement_service.follow(session, alice.id, bob.id)
        state = await engagement_service.follow(session, alice.id, bob.id)

        assert state.followers_count == 1
        assert await count_rows(session, UserFollow) == 1

    async def test_unfollow(self, session, factory):
        alice = await factory.user()
        bob = await factory.user()
        await engagement_service.follow(session, alice.id, bob.id)

        state = await engagement_service.unfollow(session, alice.id, bob.id)
        again = await engagement_service.unfollow(session, alice.id, bob.id)

        assert state.following is False
        assert state.followers_count == 0
        assert again.following_count == 0

    async def test_counter_rows_updated_in_id_order(self, session, factory, monkeypatch):
        low = await factory.user(user_id="user_a")
        high = await factory.user(user_id="user_b")
        touched = []
        increment = CounterDAO.increment
        decrement = CounterDAO.decrement

        async def recording_increment(session, entity_type, entity_id, counter, amount=1):
            touched.append(entity_id)
            return await increment(session, entity_type, entity_id, counter, amount)

        async def recording_decrement(session, entity_type, entity_id, counter, amount=1):
            touched.append(entity_id)
            return await decrement(session, entity_type, entity_id, counter, amount)

        monkeypatch.setattr(CounterDAO, "increment", staticmethod(recording_increment))
        monkeypatch.setattr(CounterDAO, "decrement", staticmethod(recording_decrement))

        # Follower has the larger ID in both directions of the edge
        await engagement_service.follow(session, high.id, low.id)
        await engagement_service.unfollow(session, high.id, low.id)
        await engagement_service.follow(session, low.id, high.id)

        assert touched == [low.id, high.id, low.id, high.id, low.id, high.id]

    async def test_racing_mutual_follow(self, session_factory):
        async with session_factory() as setup:
            factory = GraphFactory(setup)
            alice = await factory.user()
            bob = await factory.user()
            await setup.commit()

        await asyncio.gather(
            run_in_own_session(session_factory, engagement_service.follow, alice.id, bob.id),
            run_in_own_session(session_factory, engagement_service.follow, bob.id, alice.id),
        )

        async with session_factory() as check:
            assert await FollowDAO.is_following(check, alice.id, bob.id)
            assert await FollowDAO.is_following(check, bob.id, alice.id)
            for user in (alice, bob):
                assert await CounterDAO.get(check, "user", user.id, "followers_count") == 1
                assert await CounterDAO.get(check, "user", user.id, "following_count") == 1

    async def test_self_follow_rejected_without_mutation(self, session, factory):
        user = await factory.user(user_id="1")

        with pytest.raises(InvalidOperationError) as exc_info:
            await engagement_service.follow(session, "1", "1")

        assert exc_info.value.code == "SELF_FOLLOW"
        assert await CounterDAO.get(session, "user", user.id, "followers_count") == 0
        assert await CounterDAO.get(session, "user", user.id, "following_count") == 0
        assert await count_rows(session, UserFollow) == 0

    async def test_self_follow_rejected_for_unknown_user(self, session):
        with pytest.raises(InvalidOperationError):
            await engagement_service.follow(session, "ghost", "ghost")

    async def test_follow_deactivated_user(self, session, factory):
        alice = await factory.user()
        bob = await factory.user()
        bob.active = False
        await session.flush()

        with pytest.raises(NotFoundError):
            await engagement_service.follow(session, alice.id, bob.id)


class TestViewsAndShares:
    async def test_every_view_counts(self, session, factory):
        owner = await factory.user()
        video = await factory.video(owner)

        await engagement_service.record_view(session, video.id)
        state = await engagement_service.record_view(session, video.id)

        assert state.views_count == 2

    async def test_share(self, session, factory):
        owner = await factory.user()
        video = await factory.video(owner)

        state = await engagement_service.record_share(session, video.id)

        assert state.shares_count == 1

    async def test_every_save_counts(self, session, factory):
        owner = await factory.user()
        video = await factory.video(owner, saves_count=4)

        state = await engagement_service.record_save(session, video.id)

        assert state.video_id == video.id
        assert state.saves_count == 5

    async def test_save_deleted_video(self, session, factory):
        owner = await factory.user()
        video = await factory.video(owner)
        await video_service.soft_delete_video(session, video.id)

        with pytest.raises(NotFoundError) as exc_info:
            await engagement_service.record_save(session, video.id)
        assert exc_info.value.code == "VIDEO_NOT_FOUND"


class TestCommentLike:
    async def test_like_and_unlike_comment(self, session, factory):
        owner = await factory.user()
        viewer = await factory.user()
        video = await factory.video(owner)
        comment = await comment_service.add_comment(session, video.id, owner.id, "nice")

        liked = await engagement_service.like_comment(session, viewer.id, comment.id)
        again = await engagement_service.like_comment(session, viewer.id, comment.id)
        unliked = await engagement_service.unlike_comment(session, viewer.id, comment.id)

        assert liked.likes_count == 1
        assert again.likes_count == 1
        assert unliked.likes_count == 0

    async def test_cannot_like_deleted_comment(self, session, factory):
        owner = await factory.user()
        video = await factory.video(owner)
        comment = await comment_service.add_comment(session, video.id, owner.id, "gone soon")
        await comment_service.delete_comment(session, comment.id)

        with pytest.raises(NotFoundError):
            await engagement_service.like_comment(session, owner.id, comment.id)


class TestCounterDAO:
    async def test_decrement_clamps_at_zero(self, session, factory):
        owner = await factory.user()
        video = await factory.video(owner)

        assert await CounterDAO.decrement(session, "video", video.id, "likes_count") is False
        assert await CounterDAO.get(session, "video", video.id, "likes_count") == 0

    async def test_increment_then_decrement_sequence(self, session, factory):
        owner = await factory.user()
        video = await factory.video(owner)

        for op in ["inc", "dec", "dec", "inc", "inc", "dec", "dec", "dec"]:
            if op == "inc":
                await CounterDAO.increment(session, "video", video.id, "shares_count")
            else:
                await CounterDAO.decrement(session, "video", video.id, "shares_count")
            assert await CounterDAO.get(session, "video", video.id, "shares_count") >= 0

        assert await CounterDAO.get(session, "video", video.id, "shares_count") == 0

    async def test_decrement_larger_than_value_is_noop(self, session, factory):
        owner = await factory.user()
        video = await factory.video(owner, views_count=2)

        assert await CounterDAO.decrement(session, "video", video.id, "views_count", amount=5) is False
        assert await CounterDAO.get(session, "video", video.id, "views_count") == 2

    async def test_unknown_counter_rejected(self, session, factory):
        owner = await factory.user()
        with pytest.raises(InvalidOperationError):
            await CounterDAO.increment(session, "user", owner.id, "username")
        with pytest.raises(InvalidOperationError):
            await CounterDAO.increment(session, "playlist", owner.id, "likes_count")
