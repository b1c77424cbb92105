"""
互动服务

点赞、关注、播放、分享、收藏、评论点赞。

每个操作对自身的"已设置"状态幂等：关系已存在时点赞/关注不做任何修改，
关系不存在时取消点赞/取消关注不做任何修改。关系的创建/删除和计数的增减
在同一个事务里完成；并发重复插入由唯一约束拒绝，按"关系已存在"处理。
"""

from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from clipgraph.db.dao import CounterDAO, UserDAO, VideoDAO, CommentDAO, LikeDAO, CommentLikeDAO, FollowDAO
from clipgraph.db.models.comment import Comment
from clipgraph.db.models.user import User
from clipgraph.db.models.video import Video
from clipgraph.exceptions import NotFoundError, InvalidOperationError
from clipgraph.models import LikeState, CommentLikeState, FollowState, ViewState, ShareState, SaveState


async def require_user(session: AsyncSession, user_id: str) -> User:
    """获取有效用户，不存在或已注销时抛出 NotFoundError"""
    user = await UserDAO.get_active_by_id(session, user_id)
    if not user:
        raise NotFoundError("USER_NOT_FOUND", f"User {user_id} not found")
    return user


async def require_video(session: AsyncSession, video_id: str) -> Video:
    """获取有效视频，不存在或已下架时抛出 NotFoundError"""
    video = await VideoDAO.get_active_by_id(session, video_id)
    if not video:
        raise NotFoundError("VIDEO_NOT_FOUND", f"Video {video_id} not found")
    return video


async def require_comment(session: AsyncSession, comment_id: str) -> Comment:
    """获取评论（含已删除的占位评论），不存在时抛出 NotFoundError"""
    comment = await CommentDAO.get_by_id(session, comment_id)
    if not comment:
        raise NotFoundError("COMMENT_NOT_FOUND", f"Comment {comment_id} not found")
    return comment


class EngagementService:
    """互动服务"""

    @staticmethod
    async def like(
        session: AsyncSession,
        user_id: str,
        video_id: str
    ) -> LikeState:
        """
        点赞视频

        Args:
            session: 数据库会话
            user_id: 用户ID
            video_id: 视频ID

        Returns:
            点赞状态和当前点赞数
        """
        await require_user(session, user_id)
        video = await require_video(session, video_id)

        if await LikeDAO.exists(session, user_id, video_id):
            logger.debug(f"Like {user_id} -> {video_id} already exists")
        elif await LikeDAO.create(session, user_id, video_id):
            await CounterDAO.increment(session, "video", video_id, "likes_count")
            await CounterDAO.increment(session, "user", video.user_id, "total_likes_received")
            logger.debug(f"👍 {user_id} liked {video_id}")
        else:
            # 并发请求已插入同一条点赞
            logger.debug(f"Like {user_id} -> {video_id} lost insert race, treated as existing")

        return LikeState(
            video_id=video_id,
            liked=True,
            likes_count=await CounterDAO.get(session, "video", video_id, "likes_count"),
        )

    @staticmethod
    async def unlike(
        session: AsyncSession,
        user_id: str,
        video_id: str
    ) -> LikeState:
        """
        取消点赞视频

        Args:
            session: 数据库会话
            user_id: 用户ID
            video_id: 视频ID

        Returns:
            点赞状态和当前点赞数
        """
        await require_user(session, user_id)
        video = await require_video(session, video_id)

        if await LikeDAO.delete(session, user_id, video_id):
            await CounterDAO.decrement(session, "video", video_id, "likes_count")
            await CounterDAO.decrement(session, "user", video.user_id, "total_likes_received")
            logger.debug(f"👎 {user_id} unliked {video_id}")
        else:
            logger.debug(f"Like {user_id} -> {video_id} does not exist")

        return LikeState(
            video_id=video_id,
            liked=False,
            likes_count=await CounterDAO.get(session, "video", video_id, "likes_count"),
        )

    @staticmethod
    async def follow(
        session: AsyncSession,
        follower_id: str,
        following_id: str
    ) -> FollowState:
        """
        关注用户

        Args:
            session: 数据库会话
            follower_id: 关注者ID
            following_id: 被关注者ID

        Returns:
            关注状态和双方计数
        """
        # 不能关注自己
        if follower_id == following_id:
            raise InvalidOperationError("SELF_FOLLOW", "Cannot follow yourself")

        await require_user(session, follower_id)
        await require_user(session, following_id)

        if await FollowDAO.is_following(session, follower_id, following_id):
            logger.debug(f"Follow {follower_id} -> {following_id} already exists")
        elif await FollowDAO.create(session, follower_id, following_id):
            await EngagementService._shift_follow_counters(session, follower_id, following_id, 1)
            logger.debug(f"➕ {follower_id} followed {following_id}")
        else:
            logger.debug(f"Follow {follower_id} -> {following_id} lost insert race, treated as existing")

        return await EngagementService._follow_state(session, follower_id, following_id, True)

    @staticmethod
    async def unfollow(
        session: AsyncSession,
        follower_id: str,
        following_id: str
    ) -> FollowState:
        """
        取消关注用户

        Args:
            session: 数据库会话
            follower_id: 关注者ID
            following_id: 被关注者ID

        Returns:
            关注状态和双方计数
        """
        if follower_id == following_id:
            raise InvalidOperationError("SELF_FOLLOW", "Cannot unfollow yourself")

        await require_user(session, follower_id)
        await require_user(session, following_id)

        if await FollowDAO.delete(session, follower_id, following_id):
            await EngagementService._shift_follow_counters(session, follower_id, following_id, -1)
            logger.debug(f"➖ {follower_id} unfollowed {following_id}")
        else:
            logger.debug(f"Follow {follower_id} -> {following_id} does not exist")

        return await EngagementService._follow_state(session, follower_id, following_id, False)

    @staticmethod
    async def _shift_follow_counters(
        session: AsyncSession,
        follower_id: str,
        following_id: str,
        delta: int
    ):
        """
        调整关注者的关注数和被关注者的粉丝数

        两行按用户ID升序更新：互相关注的并发请求以相同顺序加行锁
        """
        updates = sorted([
            (follower_id, "following_count"),
            (following_id, "followers_count"),
        ])
        for user_id, counter in updates:
            if delta > 0:
                await CounterDAO.increment(session, "user", user_id, counter, delta)
            else:
                await CounterDAO.decrement(session, "user", user_id, counter, -delta)

    @staticmethod
    async def _follow_state(
        session: AsyncSession,
        follower_id: str,
        following_id: str,
        following: bool
    ) -> FollowState:
        return FollowState(
            user_id=following_id,
            following=following,
            followers_count=await CounterDAO.get(session, "user", following_id, "followers_count"),
            following_count=await CounterDAO.get(session, "user", follower_id, "following_count"),
        )

    @staticmethod
    async def record_view(session: AsyncSession, video_id: str) -> ViewState:
        """记录一次播放（不去重，每次播放都计数）"""
        await require_video(session, video_id)
        await CounterDAO.increment(session, "video", video_id, "views_count")

        return ViewState(
            video_id=video_id,
            views_count=await CounterDAO.get(session, "video", video_id, "views_count"),
        )

    @staticmethod
    async def record_share(session: AsyncSession, video_id: str) -> ShareState:
        """记录一次分享（不去重）"""
        await require_video(session, video_id)
        await CounterDAO.increment(session, "video", video_id, "shares_count")

        return ShareState(
            video_id=video_id,
            shares_count=await CounterDAO.get(session, "video", video_id, "shares_count"),
        )

    @staticmethod
    async def record_save(session: AsyncSession, video_id: str) -> SaveState:
        """记录一次收藏（只计数，不保存收藏关系）"""
        await require_video(session, video_id)
        await CounterDAO.increment(session, "video", video_id, "saves_count")

        return SaveState(
            video_id=video_id,
            saves_count=await CounterDAO.get(session, "video", video_id, "saves_count"),
        )

    @staticmethod
    async def like_comment(
        session: AsyncSession,
        user_id: str,
        comment_id: str
    ) -> CommentLikeState:
        """
        点赞评论

        已删除的评论不能点赞
        """
        await require_user(session, user_id)
        comment = await require_comment(session, comment_id)
        if comment.is_deleted:
            raise NotFoundError("COMMENT_NOT_FOUND", f"Comment {comment_id} was deleted")
        await require_video(session, comment.video_id)

        if await CommentLikeDAO.exists(session, user_id, comment_id):
            logger.debug(f"Comment like {user_id} -> {comment_id} already exists")
        elif await CommentLikeDAO.create(session, user_id, comment_id):
            await CounterDAO.increment(session, "comment", comment_id, "likes_count")
        else:
            logger.debug(f"Comment like {user_id} -> {comment_id} lost insert race, treated as existing")

        return CommentLikeState(
            comment_id=comment_id,
            liked=True,
            likes_count=await CounterDAO.get(session, "comment", comment_id, "likes_count"),
        )

    @staticmethod
    async def unlike_comment(
        session: AsyncSession,
        user_id: str,
        comment_id: str
    ) -> CommentLikeState:
        """取消点赞评论"""
        await require_user(session, user_id)
        await require_comment(session, comment_id)

        if await CommentLikeDAO.delete(session, user_id, comment_id):
            await CounterDAO.decrement(session, "comment", comment_id, "likes_count")

        return CommentLikeState(
            comment_id=comment_id,
            liked=False,
            likes_count=await CounterDAO.get(session, "comment", comment_id, "likes_count"),
        )


# 全局互动服务实例
engagement_service = EngagementService()
