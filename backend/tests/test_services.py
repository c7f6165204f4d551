"""
DevConnector Backend: Service Unit Tests
=========================================

What:  Tests for the business rules in UserService, ProfileService and
       PostService.
How:   Repositories are AsyncMocks; list mutations are applied to plain
       Python lists so the callbacks the services hand to the repository
       run for real. No database, no HTTP.

What we test:
    ✅ Duplicate registration and both credential failures
    ✅ Profile field mapping (optional fields and social links)
    ✅ Account deletion order: posts, profile, user
    ✅ Like/unlike/uncomment rules and newest-first insertion
    ✅ Only the author may delete a post
"""

import uuid
from datetime import date, datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from devconnector.exceptions import (
    DuplicateError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from devconnector.schemas.post import CommentRequest
from devconnector.schemas.profile import ExperienceRequest, ProfileRequest
from devconnector.schemas.user import LoginRequest, RegisterRequest
from devconnector.security import UserIdentity, hash_password
from devconnector.services import PostService, ProfileService, UserService
from devconnector.services.profile_service import build_experience_entry, build_profile_fields


def _post(author_id: uuid.UUID, likes=None, comments=None) -> SimpleNamespace:
    return SimpleNamespace(
        id=uuid.uuid4(),
        user_id=author_id,
        text="hello",
        name="Jane",
        avatar="a.png",
        likes=likes or [],
        comments=comments or [],
        date=datetime.now(timezone.utc),
    )


def _apply_to(post: SimpleNamespace, field: str):
    """side_effect for mutate_likes/mutate_comments: run the callback on `post`."""

    def mutate(post_id, callback):
        setattr(post, field, callback(list(getattr(post, field))))
        return post

    return mutate


class TestUserService:
    """Tests for registration and login rules."""

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, mock_users, test_settings):
        """An existing email fails before any hashing or insert."""
        mock_users.email_exists = AsyncMock(return_value=True)
        service = UserService(mock_users, test_settings)

        with pytest.raises(DuplicateError) as exc_info:
            await service.register(
                RegisterRequest(name="Jane", email="jane@mail.com", password="secret")
            )

        assert exc_info.value.message == "User already exists"
        mock_users.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_register_stores_hash_and_avatar(self, mock_users, test_settings):
        user_id = uuid.uuid4()
        mock_users.email_exists = AsyncMock(return_value=False)
        mock_users.create = AsyncMock(return_value=SimpleNamespace(id=user_id))
        service = UserService(mock_users, test_settings)

        response = await service.register(
            RegisterRequest(name=" Jane ", email="jane@mail.com", password="secret")
        )

        fields = mock_users.create.await_args.kwargs
        assert fields["name"] == "Jane"
        assert fields["password"] != "secret"
        assert fields["avatar"].startswith("https://www.gravatar.com/avatar/")
        assert response.token

    @pytest.mark.asyncio
    async def test_login_failures_look_identical(self, mock_users, test_settings):
        """Unknown email and wrong password give the same error."""
        service = UserService(mock_users, test_settings)
        request = LoginRequest(email="jane@mail.com", password="wrong")

        mock_users.find_by_email = AsyncMock(return_value=None)
        with pytest.raises(ValidationError) as unknown:
            await service.authenticate(request)

        mock_users.find_by_email = AsyncMock(
            return_value=SimpleNamespace(id=uuid.uuid4(), password=hash_password("right"))
        )
        with pytest.raises(ValidationError) as wrong:
            await service.authenticate(request)

        assert unknown.value.errors == wrong.value.errors == [{"msg": "Invalid credentials"}]

    @pytest.mark.asyncio
    async def test_current_user_gone(self, mock_users, test_settings):
        mock_users.find_by_id = AsyncMock(return_value=None)
        service = UserService(mock_users, test_settings)

        with pytest.raises(NotFoundError):
            await service.get_current(UserIdentity(id=str(uuid.uuid4())))


class TestProfileFields:
    """Tests for request → stored field mapping."""

    def test_only_provided_fields(self):
        request = ProfileRequest(status=" Developer ", skills="Python, Go", company="Acme", bio="")
        fields = build_profile_fields(request)

        assert fields == {"status": "Developer", "skills": ["Python", "Go"], "company": "Acme"}

    def test_social_links_grouped(self):
        request = ProfileRequest(
            status="Developer",
            skills="Python",
            twitter="https://twitter.com/jane",
            linkedin="https://linkedin.com/in/jane",
        )
        assert build_profile_fields(request)["social"] == {
            "twitter": "https://twitter.com/jane",
            "linkedin": "https://linkedin.com/in/jane",
        }

    def test_experience_entry(self):
        request = ExperienceRequest.model_validate(
            {"title": "Dev", "company": "Acme", "from": "2020-05-01", "current": True}
        )
        entry = build_experience_entry(request)

        assert uuid.UUID(entry["id"])
        assert entry["from"] == date(2020, 5, 1).isoformat()
        assert entry["to"] is None
        assert entry["current"] is True


class TestProfileService:
    def setup_method(self):
        self.identity = UserIdentity(id=str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_delete_account_order(self, mock_profiles, mock_users, mock_posts):
        """Posts go first, then the profile, then the user."""
        calls = []
        mock_posts.delete_by_user = AsyncMock(side_effect=lambda uid: calls.append("posts") or 2)
        mock_profiles.delete_by_user = AsyncMock(side_effect=lambda uid: calls.append("profile") or 1)
        mock_users.delete = AsyncMock(side_effect=lambda uid: calls.append("user") or True)
        service = ProfileService(mock_profiles, mock_users, mock_posts)

        result = await service.delete_account(self.identity)

        assert result.msg == "User deleted"
        assert calls == ["posts", "profile", "user"]

    @pytest.mark.asyncio
    async def test_upsert_unknown_user(self, mock_profiles, mock_users, mock_posts):
        mock_users.find_by_id = AsyncMock(return_value=None)
        service = ProfileService(mock_profiles, mock_users, mock_posts)

        with pytest.raises(NotFoundError) as exc_info:
            await service.upsert(self.identity, ProfileRequest(status="Dev", skills="Python"))
        assert exc_info.value.message == "User not found"
        mock_profiles.upsert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_mine_without_profile(self, mock_profiles, mock_users, mock_posts):
        mock_profiles.find_by_user = AsyncMock(return_value=None)
        service = ProfileService(mock_profiles, mock_users, mock_posts)

        with pytest.raises(NotFoundError) as exc_info:
            await service.get_mine(self.identity)
        assert exc_info.value.message == "Profile not found"

    @pytest.mark.asyncio
    async def test_experience_without_profile(self, mock_profiles, mock_users, mock_posts):
        mock_profiles.mutate_experience = AsyncMock(return_value=None)
        service = ProfileService(mock_profiles, mock_users, mock_posts)
        request = ExperienceRequest.model_validate({"title": "Dev", "company": "Acme", "from": "2020-01-01"})

        with pytest.raises(NotFoundError) as exc_info:
            await service.add_experience(self.identity, request)
        assert exc_info.value.message == "No profile found"


class TestPostService:
    """Tests for post ownership and the likes/comments rules."""

    def setup_method(self):
        self.author_id = uuid.uuid4()
        self.author = UserIdentity(id=str(self.author_id))
        self.reader = UserIdentity(id=str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_delete_by_non_author(self, mock_posts, mock_users):
        """The post is left alone when the caller is not its author."""
        mock_posts.find_by_id = AsyncMock(return_value=_post(self.author_id))
        service = PostService(mock_posts, mock_users)

        with pytest.raises(UnauthorizedError) as exc_info:
            await service.delete(self.reader, "some-id")

        assert exc_info.value.message == "User not authorized"
        mock_posts.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_by_author(self, mock_posts, mock_users):
        post = _post(self.author_id)
        mock_posts.find_by_id = AsyncMock(return_value=post)
        service = PostService(mock_posts, mock_users)

        deleted = await service.delete(self.author, str(post.id))

        assert deleted.id == post.id
        mock_posts.delete.assert_awaited_once_with(post.id)

    @pytest.mark.asyncio
    async def test_delete_missing_post(self, mock_posts, mock_users):
        mock_posts.find_by_id = AsyncMock(return_value=None)
        service = PostService(mock_posts, mock_users)

        with pytest.raises(NotFoundError) as exc_info:
            await service.delete(self.author, "nope")
        assert exc_info.value.message == "Post not found"

    @pytest.mark.asyncio
    async def test_like_goes_first_and_only_once(self, mock_posts, mock_users):
        earlier = {"id": "l0", "user": str(uuid.uuid4())}
        post = _post(self.author_id, likes=[earlier])
        mock_posts.mutate_likes = AsyncMock(side_effect=_apply_to(post, "likes"))
        service = PostService(mock_posts, mock_users)

        likes = await service.like(self.reader, str(post.id))
        assert str(likes[0].user) == self.reader.id
        assert likes[1].id == "l0"

        with pytest.raises(ValidationError) as exc_info:
            await service.like(self.reader, str(post.id))
        assert exc_info.value.message == "Post already liked"
        assert len(post.likes) == 2

    @pytest.mark.asyncio
    async def test_unlike_requires_like(self, mock_posts, mock_users):
        post = _post(self.author_id)
        mock_posts.mutate_likes = AsyncMock(side_effect=_apply_to(post, "likes"))
        service = PostService(mock_posts, mock_users)

        with pytest.raises(ValidationError) as exc_info:
            await service.unlike(self.reader, str(post.id))
        assert exc_info.value.message == "Post has not yet been liked"

    @pytest.mark.asyncio
    async def test_like_missing_post(self, mock_posts, mock_users):
        mock_posts.mutate_likes = AsyncMock(return_value=None)
        service = PostService(mock_posts, mock_users)

        with pytest.raises(NotFoundError):
            await service.like(self.reader, "nope")

    @pytest.mark.asyncio
    async def test_comment_snapshots_author(self, mock_posts, mock_users):
        reader_id = uuid.UUID(self.reader.id)
        mock_users.find_by_id = AsyncMock(
            return_value=SimpleNamespace(id=reader_id, name="Rita", avatar="r.png")
        )
        post = _post(self.author_id)
        mock_posts.mutate_comments = AsyncMock(side_effect=_apply_to(post, "comments"))
        service = PostService(mock_posts, mock_users)

        await service.comment(self.reader, str(post.id), CommentRequest(text="first"))
        comments = await service.comment(self.reader, str(post.id), CommentRequest(text="second"))

        assert [c.text for c in comments] == ["second", "first"]
        assert comments[0].name == "Rita"
        assert comments[0].user == reader_id

    @pytest.mark.asyncio
    async def test_delete_comment_requires_author(self, mock_posts, mock_users):
        """A comment can only be removed by whoever wrote it."""
        comment = {
            "id": "c1",
            "user": self.author.id,
            "text": "mine",
            "name": "Jane",
            "avatar": "",
            "date": datetime.now(timezone.utc).isoformat(),
        }
        post = _post(self.author_id, comments=[comment])
        mock_posts.mutate_comments = AsyncMock(side_effect=_apply_to(post, "comments"))
        service = PostService(mock_posts, mock_users)

        with pytest.raises(NotFoundError) as exc_info:
            await service.delete_comment(self.reader, str(post.id), "c1")
        assert exc_info.value.message == "Comment not found"
        assert len(post.comments) == 1

        remaining = await service.delete_comment(self.author, str(post.id), "c1")
        assert remaining == []
