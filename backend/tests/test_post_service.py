"""
DevConnector Backend - Post Service Unit Tests
==============================================

What:  Tests for PostService with a mocked session.

What we test:
    ✅ Unknown post → NotFoundError (404)
    ✅ Create snapshots the author's name and avatar
    ✅ Non-owner delete is rejected before anything is deleted
    ✅ Likes and comments flow through the engine and commit
"""

import pytest
from sqlalchemy.exc import OperationalError

from app.exceptions import AuthorizationError, NotFoundError, StoreError, ValidationError
from app.models.post import Post
from app.services.post_service import PostService


@pytest.fixture
def service():
    return PostService()


class TestCreateAndRead:

    @pytest.mark.asyncio
    async def test_create_snapshots_author(self, service, mock_db_session, make_user):
        user = make_user(name="Grace")

        response = await service.create_post(mock_db_session, user, "First post")

        created = mock_db_session.add.call_args[0][0]
        assert isinstance(created, Post)
        assert response.user == user.id
        assert response.name == "Grace"
        assert response.avatar == user.avatar
        assert response.likes == [] and response.comments == []

    @pytest.mark.asyncio
    async def test_create_requires_text(self, service, mock_db_session, make_user):
        with pytest.raises(ValidationError, match="Text is required"):
            await service.create_post(mock_db_session, make_user(), "   ")
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_commit_failure_becomes_store_error(
        self, service, mock_db_session, make_user
    ):
        mock_db_session.commit.side_effect = OperationalError("COMMIT", {}, Exception("disk full"))

        with pytest.raises(StoreError):
            await service.create_post(mock_db_session, make_user(), "Never stored")
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_get_missing_post(self, service, mock_db_session):
        mock_db_session.get.return_value = None

        with pytest.raises(NotFoundError, match="Post not found") as exc_info:
            await service.get_post(mock_db_session, "nope")
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_list_posts(self, service, mock_db_session, make_user, make_post, scalar_result):
        author = make_user()
        posts = [make_post(author, text="newer"), make_post(author, text="older")]
        mock_db_session.execute.return_value = scalar_result(posts)

        response = await service.list_posts(mock_db_session)

        assert [p.text for p in response] == ["newer", "older"]

    @pytest.mark.asyncio
    async def test_list_wraps_database_errors(self, service, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(StoreError):
            await service.list_posts(mock_db_session)


class TestDelete:

    @pytest.mark.asyncio
    async def test_owner_deletes(self, service, mock_db_session, make_user, make_post):
        author = make_user()
        post = make_post(author)
        mock_db_session.get.return_value = post

        response = await service.delete_post(mock_db_session, author, post.id)

        assert response.msg == "Post removed"
        mock_db_session.delete.assert_awaited_once_with(post)

    @pytest.mark.asyncio
    async def test_non_owner_cannot_delete(self, service, mock_db_session, make_user, make_post):
        post = make_post(make_user())
        mock_db_session.get.return_value = post

        with pytest.raises(AuthorizationError):
            await service.delete_post(mock_db_session, make_user(), post.id)

        mock_db_session.delete.assert_not_awaited()


class TestLikesAndComments:

    @pytest.mark.asyncio
    async def test_toggle_like(self, service, mock_db_session, make_user, make_post):
        fan = make_user()
        post = make_post(make_user())
        mock_db_session.get.return_value = post

        likes = await service.toggle_like(mock_db_session, fan, post.id)
        assert [like.user for like in likes] == [fan.id]

        likes = await service.toggle_like(mock_db_session, fan, post.id)
        assert likes == []
        assert mock_db_session.commit.await_count == 2

    @pytest.mark.asyncio
    async def test_add_comment(self, service, mock_db_session, make_user, make_post):
        commenter = make_user(name="Linus")
        post = make_post(make_user())
        mock_db_session.get.return_value = post

        comments = await service.add_comment(mock_db_session, commenter, post.id, "Agreed")

        assert len(comments) == 1
        assert comments[0].text == "Agreed"
        assert comments[0].name == "Linus"
        assert comments[0].user == commenter.id

    @pytest.mark.asyncio
    async def test_remove_comment_by_other_user(
        self, service, mock_db_session, make_user, make_post
    ):
        commenter = make_user()
        post = make_post(make_user(), comments=[{
            "id": "c1", "user": commenter.id, "text": "hi", "name": "x",
            "avatar": None, "date": "2024-01-01T00:00:00+00:00",
        }])
        mock_db_session.get.return_value = post

        with pytest.raises(AuthorizationError):
            await service.remove_comment(mock_db_session, make_user(), post.id, "c1")

        assert len(post.comments) == 1
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_remove_own_comment(self, service, mock_db_session, make_user, make_post):
        commenter = make_user()
        post = make_post(make_user(), comments=[{
            "id": "c1", "user": commenter.id, "text": "hi", "name": "x",
            "avatar": None, "date": "2024-01-01T00:00:00+00:00",
        }])
        mock_db_session.get.return_value = post

        response = await service.remove_comment(mock_db_session, commenter, post.id, "c1")

        assert response.comments == []
