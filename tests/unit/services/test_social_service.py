"""Unit tests for SocialGraphService."""

from uuid import UUID, uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    AuthorizationError,
    CommentNotFoundError,
    DuplicateLikeError,
    PostNotFoundError,
    ProfileNotFoundError,
    ValidationError,
)
from domain.entities.comment import Comment, CommentView
from domain.entities.post import Post
from domain.entities.profile import Profile
from domain.services.social_service import SocialGraphService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> SocialGraphService:
    return SocialGraphService(lambda: uow)


@pytest.fixture
def post(other_user_id: UUID) -> Post:
    return Post(user_id=other_user_id, content="Hello world")


class TestToggleLike:
    @pytest.mark.asyncio
    async def test_like_adds_row_and_returns_fresh_count(
        self, service: SocialGraphService, uow: FakeUnitOfWork, user_id: UUID, post: Post
    ):
        uow.posts.get.return_value = post
        uow.likes.create.side_effect = lambda like: like
        uow.likes.count_for_post.return_value = 1

        state = await service.toggle_like(user_id, post.id, currently_liked=False)

        assert state.liked is True
        assert state.like_count == 1
        assert state.post_id == post.id
        created = uow.likes.create.await_args.args[0]
        assert (created.user_id, created.post_id) == (user_id, post.id)
        assert uow.principal_id == user_id
        assert uow.committed

    @pytest.mark.asyncio
    async def test_unlike_removes_row(
        self, service: SocialGraphService, uow: FakeUnitOfWork, user_id: UUID, post: Post
    ):
        uow.posts.get.return_value = post
        uow.likes.delete_for.return_value = True
        uow.likes.count_for_post.return_value = 0

        state = await service.toggle_like(user_id, post.id, currently_liked=True)

        assert state.liked is False
        assert state.like_count == 0
        uow.likes.delete_for.assert_awaited_once_with(user_id, post.id)
        uow.likes.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_unlike_without_row_is_noop(
        self, service: SocialGraphService, uow: FakeUnitOfWork, user_id: UUID, post: Post
    ):
        uow.posts.get.return_value = post
        uow.likes.delete_for.return_value = False
        uow.likes.count_for_post.return_value = 3

        state = await service.toggle_like(user_id, post.id, currently_liked=True)

        assert state.liked is False
        assert state.like_count == 3

    @pytest.mark.asyncio
    async def test_duplicate_like_raises_conflict(
        self, service: SocialGraphService, uow: FakeUnitOfWork, user_id: UUID, post: Post
    ):
        uow.posts.get.return_value = post
        uow.likes.create.side_effect = IntegrityError(
            "INSERT INTO likes",
            {},
            Exception("UNIQUE constraint failed: likes.user_id, likes.post_id"),
        )

        with pytest.raises(DuplicateLikeError):
            await service.toggle_like(user_id, post.id, currently_liked=False)

        assert uow.rolled_back
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_missing_post_raises(
        self, service: SocialGraphService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.toggle_like(user_id, uuid4(), currently_liked=False)

        uow.likes.create.assert_not_called()


class TestCounts:
    @pytest.mark.asyncio
    async def test_is_liked(self, service: SocialGraphService, uow: FakeUnitOfWork, user_id: UUID):
        uow.likes.exists.return_value = False

        assert await service.is_liked(user_id, uuid4()) is False

    @pytest.mark.asyncio
    async def test_like_and_comment_counts(self, service: SocialGraphService, uow: FakeUnitOfWork):
        uow.likes.count_for_post.return_value = 4
        uow.comments.count_for_post.return_value = 2
        post_id = uuid4()

        assert await service.like_count(post_id) == 4
        assert await service.comment_count(post_id) == 2


class TestComments:
    @pytest.mark.asyncio
    async def test_add_comment(
        self, service: SocialGraphService, uow: FakeUnitOfWork, user_id: UUID, post: Post
    ):
        author = Profile(id=user_id, name="Bob")
        uow.posts.get.return_value = post
        uow.profiles.get.return_value = author
        uow.comments.create.side_effect = lambda c: c

        view = await service.add_comment(user_id, post.id, " Great post! ")

        assert view.comment.content == "Great post!"
        assert view.comment.post_id == post.id
        assert view.author is author
        assert uow.principal_id == user_id
        assert uow.committed

    @pytest.mark.asyncio
    async def test_blank_comment_is_rejected(
        self, service: SocialGraphService, uow: FakeUnitOfWork, user_id: UUID
    ):
        with pytest.raises(ValidationError):
            await service.add_comment(user_id, uuid4(), "  ")

        uow.comments.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_add_comment_on_missing_post(
        self, service: SocialGraphService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.add_comment(user_id, uuid4(), "Hi")

    @pytest.mark.asyncio
    async def test_add_comment_without_profile(
        self, service: SocialGraphService, uow: FakeUnitOfWork, user_id: UUID, post: Post
    ):
        uow.posts.get.return_value = post
        uow.profiles.get.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.add_comment(user_id, post.id, "Hi")

    @pytest.mark.asyncio
    async def test_list_comments(
        self, service: SocialGraphService, uow: FakeUnitOfWork, user_id: UUID, post: Post
    ):
        views = [
            CommentView(
                comment=Comment(user_id=user_id, post_id=post.id, content="first"),
                author=Profile(id=user_id),
            )
        ]
        uow.posts.get.return_value = post
        uow.comments.list_views_for_post.return_value = views

        assert await service.list_comments(post.id) == views

    @pytest.mark.asyncio
    async def test_update_comment(
        self, service: SocialGraphService, uow: FakeUnitOfWork, user_id: UUID, post: Post
    ):
        comment = Comment(user_id=user_id, post_id=post.id, content="old")
        uow.comments.get.return_value = comment
        uow.comments.update.side_effect = lambda c: c
        uow.profiles.get.return_value = Profile(id=user_id, name="Bob")

        view = await service.update_comment(user_id, comment.id, "new")

        assert view.comment.content == "new"
        assert uow.principal_id == user_id
        assert uow.committed

    @pytest.mark.asyncio
    async def test_update_comment_by_non_author_is_forbidden(
        self,
        service: SocialGraphService,
        uow: FakeUnitOfWork,
        user_id: UUID,
        other_user_id: UUID,
        post: Post,
    ):
        comment = Comment(user_id=user_id, post_id=post.id, content="same")
        uow.comments.get.return_value = comment

        with pytest.raises(AuthorizationError):
            await service.update_comment(other_user_id, comment.id, "same")

        uow.comments.update.assert_not_awaited()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_update_missing_comment(
        self, service: SocialGraphService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.comments.get.return_value = None

        with pytest.raises(CommentNotFoundError):
            await service.update_comment(user_id, uuid4(), "new")

    @pytest.mark.asyncio
    async def test_delete_missing_comment(
        self, service: SocialGraphService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.comments.delete.return_value = False

        with pytest.raises(CommentNotFoundError):
            await service.delete_comment(user_id, uuid4())

        assert not uow.committed
