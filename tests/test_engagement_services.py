"""
Idea Canvas Backend — Wishlist / Comment / Profile Service Unit Tests
======================================================================

What we test:
    ✅ Wishlist: duplicate detection (lookup and unique index), insert with
       addedAt, empty email, delete
    ✅ Comments: insert with createdAt and free-form fields, per-blog query
    ✅ Profiles: required email, "" defaults, upsert with createdAt on insert,
       image update, stats aggregation, missing profile
"""

import asyncio
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from ideacanvas.exceptions import InvalidIdError, NotFoundError, ValidationError
from ideacanvas.schemas.comment import CommentCreate
from ideacanvas.schemas.profile import ProfileImageUpdate, ProfileUpsert
from ideacanvas.schemas.wishlist import WishlistCreate
from ideacanvas.services.comment_service import CommentService
from ideacanvas.services.profile_service import ProfileService
from ideacanvas.services.wishlist_service import WishlistService


class TestWishlistService:

    def setup_method(self):
        self.service = WishlistService()
        self.item = WishlistCreate.model_validate({
            "blogId": "b1",
            "title": "A blog",
            "image": "https://img",
            "category": "Tech",
            "userEmail": "me@x.io",
        })

    @pytest.mark.asyncio
    async def test_already_in_wishlist(self, mock_db):
        mock_db["wishlist"].find_one.return_value = {"_id": ObjectId()}

        result = await self.service.add_item(mock_db, self.item)

        assert result.success is False
        assert result.message == "Already in wishlist"
        mock_db["wishlist"].find_one.assert_awaited_once_with({"blogId": "b1", "userEmail": "me@x.io"})
        mock_db["wishlist"].insert_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_adds_new_item(self, mock_db):
        oid = ObjectId()
        mock_db["wishlist"].insert_one.return_value = MagicMock(acknowledged=True, inserted_id=oid)

        result = await self.service.add_item(mock_db, self.item)

        stored = mock_db["wishlist"].insert_one.await_args.args[0]
        assert stored["blogId"] == "b1"
        assert stored["userEmail"] == "me@x.io"
        assert isinstance(stored["addedAt"], datetime)
        assert result.success is True
        assert result.inserted_id == str(oid)

    @pytest.mark.asyncio
    async def test_concurrent_adds_store_one_item(self, mock_db):
        # Both lookups miss; the unique index rejects the second insert
        mock_db["wishlist"].insert_one = AsyncMock(side_effect=[
            MagicMock(acknowledged=True, inserted_id=ObjectId()),
            DuplicateKeyError("E11000 duplicate key"),
        ])

        first, second = await asyncio.gather(
            self.service.add_item(mock_db, self.item),
            self.service.add_item(mock_db, self.item),
        )

        assert sorted([first.success, second.success]) == [False, True]
        loser = first if not first.success else second
        assert loser.message == "Already in wishlist"
        assert loser.inserted_id is None

    @pytest.mark.asyncio
    async def test_list_without_email_is_empty(self, mock_db):
        assert await self.service.list_items(mock_db, None) == []
        mock_db["wishlist"].find.assert_not_called()

    @pytest.mark.asyncio
    async def test_list_by_email(self, mock_db, make_cursor):
        oid = ObjectId()
        mock_db["wishlist"].find.return_value = make_cursor([{"_id": oid, "userEmail": "me@x.io"}])

        items = await self.service.list_items(mock_db, "me@x.io")

        mock_db["wishlist"].find.assert_called_once_with({"userEmail": "me@x.io"})
        assert items == [{"_id": str(oid), "userEmail": "me@x.io"}]

    @pytest.mark.asyncio
    async def test_remove(self, mock_db):
        oid = ObjectId()
        mock_db["wishlist"].delete_one.return_value = MagicMock(acknowledged=True, deleted_count=1)

        result = await self.service.remove_item(mock_db, str(oid))

        mock_db["wishlist"].delete_one.assert_awaited_once_with({"_id": oid})
        assert result.deleted_count == 1

    @pytest.mark.asyncio
    async def test_remove_invalid_id(self, mock_db):
        with pytest.raises(InvalidIdError):
            await self.service.remove_item(mock_db, "123")


class TestCommentService:

    def setup_method(self):
        self.service = CommentService()

    @pytest.mark.asyncio
    async def test_add_comment_keeps_client_fields(self, mock_db):
        mock_db["comments"].insert_one.return_value = MagicMock(acknowledged=True, inserted_id=ObjectId())
        comment = CommentCreate.model_validate({
            "blogId": "b1",
            "userEmail": "me@x.io",
            "comment": "Nice post",
            "userName": "Me",
        })

        result = await self.service.add_comment(mock_db, comment)

        stored = mock_db["comments"].insert_one.await_args.args[0]
        assert stored["comment"] == "Nice post"
        assert stored["userName"] == "Me"
        assert stored["blogId"] == "b1"
        assert isinstance(stored["createdAt"], datetime)
        assert result.success is True

    @pytest.mark.asyncio
    async def test_list_for_blog_queries_by_string_id(self, mock_db, make_cursor):
        cursor = make_cursor([])
        mock_db["comments"].find.return_value = cursor

        await self.service.list_for_blog(mock_db, "65f0c0ffee0000000000abcd")

        mock_db["comments"].find.assert_called_once_with({"blogId": "65f0c0ffee0000000000abcd"})
        cursor.sort.assert_called_once_with("createdAt", -1)


class TestProfileService:

    def setup_method(self):
        self.service = ProfileService()

    @pytest.mark.asyncio
    async def test_get_missing_profile(self, mock_db):
        with pytest.raises(NotFoundError, match="Profile not found"):
            await self.service.get_profile(mock_db, "ghost@x.io")

    @pytest.mark.asyncio
    async def test_save_requires_email(self, mock_db):
        with pytest.raises(ValidationError, match="Email is required"):
            await self.service.save_profile(mock_db, ProfileUpsert(name="No Email"))

    @pytest.mark.asyncio
    async def test_save_upserts_with_defaults(self, mock_db):
        upserted = ObjectId()
        mock_db["user_profiles"].update_one.return_value = MagicMock(
            acknowledged=True, matched_count=0, modified_count=0, upserted_id=upserted
        )

        result = await self.service.save_profile(
            mock_db, ProfileUpsert(email="me@x.io", name="Me", github="me")
        )

        args, kwargs = mock_db["user_profiles"].update_one.await_args
        query, update = args
        assert query == {"email": "me@x.io"}
        assert kwargs == {"upsert": True}
        assert update["$set"]["name"] == "Me"
        assert update["$set"]["github"] == "me"
        assert update["$set"]["bio"] == ""
        assert update["$set"]["linkedin"] == ""
        assert "createdAt" in update["$setOnInsert"]
        assert result.message == "Profile saved successfully"
        assert result.result.upserted_id == str(upserted)
        assert result.result.upserted_count == 1

    @pytest.mark.asyncio
    async def test_update_image_requires_both_fields(self, mock_db):
        with pytest.raises(ValidationError, match="Email and photoURL are required"):
            await self.service.update_image(mock_db, ProfileImageUpdate(email="me@x.io"))

    @pytest.mark.asyncio
    async def test_update_image(self, mock_db):
        mock_db["user_profiles"].update_one.return_value = MagicMock(
            acknowledged=True, matched_count=1, modified_count=1, upserted_id=None
        )

        body = ProfileImageUpdate.model_validate({"email": "me@x.io", "photoURL": "https://p"})
        result = await self.service.update_image(mock_db, body)

        update = mock_db["user_profiles"].update_one.await_args.args[1]
        assert update["$set"]["photoURL"] == "https://p"
        assert result.message == "Profile image updated successfully"

    @pytest.mark.asyncio
    async def test_user_stats(self, mock_db, make_cursor):
        mock_db["blogs"].count_documents.return_value = 3
        mock_db["wishlist"].count_documents.return_value = 2
        mock_db["comments"].count_documents.return_value = 5
        mock_db["blogs"].aggregate.return_value = make_cursor([{"_id": None, "totalLikes": 9}])

        result = await self.service.user_stats(mock_db, "me@x.io")

        assert result.stats.model_dump() == {"blogs": 3, "wishlist": 2, "comments": 5, "likes": 9}
        mock_db["wishlist"].count_documents.assert_awaited_once_with({"userEmail": "me@x.io"})
        pipeline = mock_db["blogs"].aggregate.call_args.args[0]
        assert pipeline[0] == {"$match": {"email": "me@x.io"}}
