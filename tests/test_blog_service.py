"""
Idea Canvas Backend — Blog Service Unit Tests
==============================================

What we test:
    ✅ Creation defaults (createdAt, likes, likedBy) and extra fields
    ✅ Listing filters: category, "All", escaped title search, pagination
    ✅ Top blogs by word count, recent limits
    ✅ Single fetch: invalid id, missing blog, like defaults
    ✅ Like toggle: like, unlike, missing email, lost race, give-up
    ✅ Likes total and per-author listing with comment counts
"""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import OperationFailure

from ideacanvas.exceptions import (
    DatabaseError,
    InvalidIdError,
    NotFoundError,
    ValidationError,
)
from ideacanvas.schemas.blog import BlogCreate, BlogUpdate
from ideacanvas.services.blog_service import BlogService, word_count


def update_result(matched: int):
    return MagicMock(acknowledged=True, matched_count=matched, modified_count=matched, upserted_id=None)


class TestWordCount:

    def test_counts_whitespace_separated_words(self):
        assert word_count("  one two\tthree\nfour  ") == 4

    def test_missing_or_non_string_is_zero(self):
        assert word_count(None) == 0
        assert word_count("") == 0
        assert word_count(42) == 0

    def test_whitespace_only_counts_one(self):
        assert word_count("   ") == 1


class TestBlogServiceCreate:

    def setup_method(self):
        self.service = BlogService()

    @pytest.mark.asyncio
    async def test_create_sets_defaults_and_keeps_extra_fields(self, mock_db):
        oid = ObjectId()
        mock_db["blogs"].insert_one.return_value = MagicMock(acknowledged=True, inserted_id=oid)

        blog = BlogCreate.model_validate({
            "title": "Hello",
            "shortDescription": "short",
            "email": "author@example.com",
            "authorName": "Ada",
        })
        result = await self.service.create_blog(mock_db, blog)

        stored = mock_db["blogs"].insert_one.await_args.args[0]
        assert stored["title"] == "Hello"
        assert stored["shortDescription"] == "short"
        assert stored["authorName"] == "Ada"
        assert stored["likes"] == 0
        assert stored["likedBy"] == []
        assert isinstance(stored["createdAt"], datetime)
        assert "longDescription" not in stored
        assert result.inserted_id == str(oid)
        assert result.acknowledged is True

    @pytest.mark.asyncio
    async def test_create_keeps_client_likes(self, mock_db):
        mock_db["blogs"].insert_one.return_value = MagicMock(acknowledged=True, inserted_id=ObjectId())

        blog = BlogCreate.model_validate({"title": "x", "likes": 2, "likedBy": ["a@x.io", "b@x.io"]})
        await self.service.create_blog(mock_db, blog)

        stored = mock_db["blogs"].insert_one.await_args.args[0]
        assert stored["likes"] == 2
        assert stored["likedBy"] == ["a@x.io", "b@x.io"]


class TestBlogServiceList:

    def setup_method(self):
        self.service = BlogService()

    @pytest.mark.asyncio
    async def test_category_and_search_filters(self, mock_db, make_cursor):
        blog = {"_id": ObjectId(), "title": "Python tips"}
        cursor = make_cursor([blog])
        mock_db["blogs"].find.return_value = cursor
        mock_db["blogs"].count_documents.return_value = 1

        result = await self.service.list_blogs(
            mock_db, category="Tech", search="  c++ ", page=3, limit=5
        )

        query = mock_db["blogs"].find.call_args.args[0]
        assert query["category"] == "Tech"
        assert query["title"] == {"$regex": r"c\+\+", "$options": "i"}
        mock_db["blogs"].count_documents.assert_awaited_once_with(query)
        cursor.skip.assert_called_once_with(10)
        cursor.limit.assert_called_once_with(5)
        assert result.total_blogs == 1
        assert result.blogs[0]["_id"] == str(blog["_id"])

    @pytest.mark.asyncio
    async def test_all_category_and_blank_search_are_ignored(self, mock_db):
        await self.service.list_blogs(mock_db, category="All", search="   ")

        query = mock_db["blogs"].find.call_args.args[0]
        assert query == {}

    @pytest.mark.asyncio
    async def test_driver_failure_becomes_database_error(self, mock_db):
        mock_db["blogs"].count_documents.side_effect = OperationFailure("boom")

        with pytest.raises(DatabaseError, match="Failed to fetch blogs"):
            await self.service.list_blogs(mock_db)


class TestBlogServiceAggregates:

    def setup_method(self):
        self.service = BlogService()

    @pytest.mark.asyncio
    async def test_top_blogs_sorted_by_word_count_and_capped(self, mock_db, make_cursor):
        blogs = [
            {"_id": ObjectId(), "longDescription": " ".join(["w"] * n)}
            for n in range(12)
        ]
        blogs.append({"_id": ObjectId()})
        mock_db["blogs"].find.return_value = make_cursor(blogs)

        top = await self.service.top_blogs(mock_db)

        assert len(top) == 10
        assert [b["wordCount"] for b in top] == list(range(11, 1, -1))

    @pytest.mark.asyncio
    async def test_recent_uses_requested_limit(self, mock_db, make_cursor):
        cursor = make_cursor([])
        mock_db["blogs"].find.return_value = cursor

        await self.service.recent_blogs(mock_db, limit=self.service.RECENT_BLOGS_LIMIT)

        cursor.limit.assert_called_once_with(6)

    @pytest.mark.asyncio
    async def test_total_likes(self, mock_db, make_cursor):
        mock_db["blogs"].aggregate.return_value = make_cursor([{"_id": None, "totalLikes": 17}])
        assert await self.service.total_likes(mock_db) == 17

    @pytest.mark.asyncio
    async def test_total_likes_empty_collection(self, mock_db):
        assert await self.service.total_likes(mock_db) == 0

    @pytest.mark.asyncio
    async def test_user_blogs_include_comment_counts(self, mock_db, make_cursor):
        first, second = ObjectId(), ObjectId()
        mock_db["blogs"].find.return_value = make_cursor([
            {"_id": first, "email": "a@x.io", "likes": 3, "likedBy": ["b", "c", "d"]},
            {"_id": second, "email": "a@x.io"},
        ])
        mock_db["comments"].count_documents = AsyncMock(side_effect=[4, 0])

        result = await self.service.user_blogs(mock_db, "a@x.io")

        assert result.total_blogs == 2
        assert result.blogs[0]["commentCount"] == 4
        assert result.blogs[1]["commentCount"] == 0
        assert result.blogs[1]["likes"] == 0
        assert result.blogs[1]["likedBy"] == []
        mock_db["comments"].count_documents.assert_any_await({"blogId": str(first)})


class TestBlogServiceGetAndUpdate:

    def setup_method(self):
        self.service = BlogService()

    @pytest.mark.asyncio
    async def test_invalid_id(self, mock_db):
        with pytest.raises(InvalidIdError, match="Invalid blog ID"):
            await self.service.get_blog(mock_db, "not-an-id")

    @pytest.mark.asyncio
    async def test_missing_blog(self, mock_db):
        with pytest.raises(NotFoundError, match="Blog not found"):
            await self.service.get_blog(mock_db, str(ObjectId()))

    @pytest.mark.asyncio
    async def test_fills_like_defaults(self, mock_db):
        oid = ObjectId()
        mock_db["blogs"].find_one.return_value = {"_id": oid, "title": "old post"}

        blog = await self.service.get_blog(mock_db, str(oid))

        assert blog == {"_id": str(oid), "title": "old post", "likes": 0, "likedBy": []}

    @pytest.mark.asyncio
    async def test_update_sets_all_editable_fields(self, mock_db):
        mock_db["blogs"].update_one.return_value = update_result(1)
        oid = ObjectId()

        result = await self.service.update_blog(
            mock_db, str(oid), BlogUpdate.model_validate({"title": "New", "longDescription": "body"})
        )

        query, update = mock_db["blogs"].update_one.await_args.args
        assert query == {"_id": oid}
        fields = update["$set"]
        assert fields["title"] == "New"
        assert fields["longDescription"] == "body"
        assert fields["image"] is None
        assert set(fields) == {
            "title", "image", "category", "shortDescription", "longDescription", "updatedAt",
        }
        assert result.message == "Blog updated successfully"

    @pytest.mark.asyncio
    async def test_update_unknown_blog(self, mock_db):
        mock_db["blogs"].update_one.return_value = update_result(0)

        with pytest.raises(NotFoundError):
            await self.service.update_blog(mock_db, str(ObjectId()), BlogUpdate())


class TestBlogServiceToggleLike:

    def setup_method(self):
        self.service = BlogService()
        self.oid = ObjectId()

    @pytest.mark.asyncio
    async def test_requires_user_email(self, mock_db):
        with pytest.raises(ValidationError, match="User email is required."):
            await self.service.toggle_like(mock_db, str(self.oid), None)

    @pytest.mark.asyncio
    async def test_like_when_not_yet_liked(self, mock_db):
        mock_db["blogs"].find_one.return_value = {"_id": self.oid, "likedBy": ["other@x.io"]}
        mock_db["blogs"].update_one.return_value = update_result(1)

        result = await self.service.toggle_like(mock_db, str(self.oid), "me@x.io")

        query, update = mock_db["blogs"].update_one.await_args.args
        assert query == {"_id": self.oid, "likedBy": {"$ne": "me@x.io"}}
        assert update == {"$inc": {"likes": 1}, "$push": {"likedBy": "me@x.io"}}
        assert result.success is True

    @pytest.mark.asyncio
    async def test_unlike_when_already_liked(self, mock_db):
        mock_db["blogs"].find_one.return_value = {"_id": self.oid, "likedBy": ["me@x.io"]}
        mock_db["blogs"].update_one.return_value = update_result(1)

        await self.service.toggle_like(mock_db, str(self.oid), "me@x.io")

        query, update = mock_db["blogs"].update_one.await_args.args
        assert query == {"_id": self.oid, "likedBy": "me@x.io"}
        assert update == {"$inc": {"likes": -1}, "$pull": {"likedBy": "me@x.io"}}

    @pytest.mark.asyncio
    async def test_null_liked_by_is_repaired_on_like(self, mock_db):
        mock_db["blogs"].find_one.return_value = {"_id": self.oid, "likedBy": None}
        mock_db["blogs"].update_one.return_value = update_result(1)

        await self.service.toggle_like(mock_db, str(self.oid), "me@x.io")

        query, update = mock_db["blogs"].update_one.await_args.args
        assert query == {"_id": self.oid, "likedBy": {"$not": {"$type": "array"}}}
        assert update == {"$set": {"likedBy": ["me@x.io"], "likes": 1}}

    @pytest.mark.asyncio
    async def test_lost_race_rereads_and_applies_opposite(self, mock_db):
        # A concurrent request liked first: our like guard misses, the re-read sees the like
        mock_db["blogs"].find_one = AsyncMock(side_effect=[
            {"_id": self.oid, "likedBy": []},
            {"_id": self.oid, "likedBy": ["me@x.io"]},
        ])
        mock_db["blogs"].update_one = AsyncMock(side_effect=[update_result(0), update_result(1)])

        await self.service.toggle_like(mock_db, str(self.oid), "me@x.io")

        last_update = mock_db["blogs"].update_one.await_args_list[-1].args[1]
        assert last_update["$inc"] == {"likes": -1}
        assert mock_db["blogs"].update_one.await_count == 2

    @pytest.mark.asyncio
    async def test_blog_missing(self, mock_db):
        with pytest.raises(NotFoundError, match="Blog not found."):
            await self.service.toggle_like(mock_db, str(self.oid), "me@x.io")

    @pytest.mark.asyncio
    async def test_gives_up_after_repeated_contention(self, mock_db):
        mock_db["blogs"].find_one.return_value = {"_id": self.oid, "likedBy": []}
        mock_db["blogs"].update_one.return_value = update_result(0)

        with pytest.raises(DatabaseError):
            await self.service.toggle_like(mock_db, str(self.oid), "me@x.io")

        assert mock_db["blogs"].update_one.await_count == self.service.LIKE_TOGGLE_ATTEMPTS
