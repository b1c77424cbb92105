"""Tests for engagement, viral and trending scores."""

import math
from datetime import timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from clipgraph.services.scoring_service import (
    ScoringService,
    engagement_score,
    trending_score,
    viral_score,
)
from clipgraph.db import base as db_base
from clipgraph.db.session import get_session
from tests.conftest import NOW, GraphFactory, hours_ago


class TestEngagementScore:
    def test_weighted_rate_per_view(self):
        score = engagement_score(views=100, likes=10, comments=2, shares=1, saves=0)
        assert score == pytest.approx(0.17)

    def test_saves_weighted(self):
        score = engagement_score(views=10, likes=0, comments=0, shares=0, saves=2)
        assert score == pytest.approx(0.5)

    def test_zero_views_is_zero(self):
        assert engagement_score(0, 5, 5, 5, 5) == 0.0

    @pytest.mark.parametrize("counts", [
        (1, 0, 0, 0, 0),
        (1000, 3, 0, 7, 1),
        (5, 50, 20, 10, 3),
    ])
    def test_never_negative(self, counts):
        assert engagement_score(*counts) >= 0


class TestViralScore:
    def test_scales_by_log_views(self):
        expected = 0.17 * math.log(101)
        assert viral_score(100, 10, 2, 1, 0) == pytest.approx(expected)

    def test_zero_views_is_zero(self):
        assert viral_score(0, 10, 0, 0, 0) == 0.0


class TestTrendingScore:
    def test_decays_by_age_in_hours(self):
        score = trending_score(10, 2, 1, created_at=hours_ago(2), now=NOW)
        assert score == pytest.approx(17 / 3)
        assert round(score, 2) == 5.67

    def test_fresh_video_not_divided(self):
        assert trending_score(4, 0, 0, created_at=NOW, now=NOW) == pytest.approx(4.0)

    def test_future_creation_clamped(self):
        score = trending_score(4, 0, 0, created_at=NOW + timedelta(hours=3), now=NOW)
        assert score == pytest.approx(4.0)

    def test_same_inputs_same_score(self):
        first = trending_score(7, 3, 1, hours_ago(5), NOW)
        second = trending_score(7, 3, 1, hours_ago(5), NOW)
        assert first == second


class TestRefreshScores:
    async def test_writes_cached_scores(self, session, factory):
        owner = await factory.user()
        video = await factory.video(owner, views_count=100, likes_count=10, comments_count=2, shares_count=1)

        service = ScoringService(clock=lambda: NOW)
        refreshed = await service.refresh_scores(session, [video])

        assert refreshed == [video]
        assert video.engagement_score == pytest.approx(0.17)
        assert video.viral_score == pytest.approx(0.17 * math.log(101))
        assert video.scores_updated_at == NOW


class TestRefreshRecent:
    async def test_refresh_recent_in_script_session(self, engine, monkeypatch):
        session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        monkeypatch.setattr(db_base, "AsyncSessionLocal", session_factory)

        async with get_session() as session:
            factory = GraphFactory(session)
            owner = await factory.user()
            video = await factory.video(owner, views_count=10, likes_count=1)

            refreshed = await ScoringService(clock=lambda: NOW).refresh_recent(
                session, since=hours_ago(1)
            )

        assert refreshed == 1
        assert video.engagement_score == pytest.approx(0.1)
