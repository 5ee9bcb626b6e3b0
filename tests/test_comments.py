# tests/test_comments.py
"""Tests for the comment service and endpoints."""

import pytest
from unittest.mock import MagicMock

from conftest import auth
from videotube.errors import Forbidden, InvalidRequest, NotFound
from videotube.models import Comment, Video
from videotube.services.comments import add_comment, delete_comment, get_video_comments, update_comment


class TestCommentService:
    """Test the comment service functions against a mocked session."""

    def setup_method(self):
        """Set up test fixtures."""
        self.mock_db = MagicMock()

    def test_add_comment_requires_content(self):
        with pytest.raises(InvalidRequest):
            add_comment(self.mock_db, "a" * 32, "b" * 32, "   ")
        self.mock_db.add.assert_not_called()

    def test_add_comment_to_missing_video(self):
        self.mock_db.get.return_value = None

        with pytest.raises(NotFound) as exc:
            add_comment(self.mock_db, "a" * 32, "b" * 32, "hello")

        assert exc.value.message == "Video not found"
        self.mock_db.add.assert_not_called()

    def test_add_comment_strips_content(self):
        self.mock_db.get.return_value = Video(id="a" * 32, owner_id="e" * 32, is_published=True)

        result = add_comment(self.mock_db, "a" * 32, "b" * 32, "  hello  ")

        added = self.mock_db.add.call_args[0][0]
        assert isinstance(added, Comment)
        assert added.content == "hello"
        assert result["content"] == "hello"
        assert result["owner_id"] == "b" * 32

    def test_update_comment_by_non_owner(self):
        self.mock_db.get.return_value = Comment(id="c" * 32, owner_id="d" * 32, content="old")

        with pytest.raises(Forbidden):
            update_comment(self.mock_db, "c" * 32, "b" * 32, "new")

    def test_update_checks_content_before_ownership(self):
        with pytest.raises(InvalidRequest):
            update_comment(self.mock_db, "c" * 32, "b" * 32, "")
        self.mock_db.get.assert_not_called()

    def test_delete_missing_comment(self):
        self.mock_db.get.return_value = None

        with pytest.raises(NotFound):
            delete_comment(self.mock_db, "c" * 32, "b" * 32)

    def test_comments_for_missing_video(self):
        self.mock_db.get.return_value = None

        with pytest.raises(NotFound):
            get_video_comments(self.mock_db, "a" * 32, "b" * 32)

    def test_comments_on_someone_elses_draft(self):
        self.mock_db.get.return_value = Video(id="a" * 32, owner_id="e" * 32, is_published=False)

        with pytest.raises(NotFound):
            add_comment(self.mock_db, "a" * 32, "b" * 32, "hello")
        with pytest.raises(NotFound):
            get_video_comments(self.mock_db, "a" * 32, "b" * 32)
        self.mock_db.add.assert_not_called()


class TestCommentEndpoints:
    """Exercise the comment routes end to end."""

    def test_comments_are_paginated_with_owner_and_likes(self, client, make_user, make_video):
        owner = make_user(username="host")
        fan = make_user(username="fan")
        video = make_video(owner)
        ids = [
            client.post(f"/api/v1/comments/{video}", json={"content": f"c{i}"}, headers=auth(fan)).json()["data"]["id"]
            for i in range(3)
        ]
        client.post(f"/api/v1/likes/toggle/c/{ids[0]}", headers=auth(owner))

        response = client.get(f"/api/v1/comments/{video}", params={"limit": 2}, headers=auth(owner))

        assert response.status_code == 200
        page = response.json()["data"]
        assert page["total_docs"] == 3
        assert page["total_pages"] == 2
        assert len(page["docs"]) == 2
        assert all(doc["owner"]["username"] == "fan" for doc in page["docs"])

        everything = client.get(f"/api/v1/comments/{video}", params={"limit": 10}, headers=auth(owner)).json()
        liked = [doc for doc in everything["data"]["docs"] if doc["id"] == ids[0]][0]
        assert liked["likes_count"] == 1
        assert liked["likes"][0]["username"] == "host"

    def test_add_comment_without_content(self, client, make_user, make_video):
        user = make_user()
        video = make_video(user)

        response = client.post(f"/api/v1/comments/{video}", json={}, headers=auth(user))

        assert response.status_code == 400
        assert response.json()["message"] == "Content is required"

    def test_comment_on_missing_video(self, client, make_user):
        user = make_user()

        response = client.post(f"/api/v1/comments/{'1' * 32}", json={"content": "hi"}, headers=auth(user))

        assert response.status_code == 404

    def test_owner_edits_comment(self, client, make_user, make_video):
        user = make_user()
        video = make_video(user)
        comment = client.post(f"/api/v1/comments/{video}", json={"content": "tpyo"}, headers=auth(user)).json()["data"]

        response = client.patch(f"/api/v1/comments/c/{comment['id']}", json={"content": "typo"}, headers=auth(user))

        assert response.status_code == 200
        assert response.json()["data"]["content"] == "typo"
