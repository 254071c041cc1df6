"""
Unit tests for the SQL-backed website service and document store.
"""
import uuid

import pytest
from sqlalchemy.exc import OperationalError
from unittest.mock import AsyncMock, patch

from simplebiz.content.errors import DocumentNotFound, TransportFailure, VersionConflict
from simplebiz.content.session import EditingSession, persist_path_update
from simplebiz.services.website_service import (
    WebsiteDocumentStore,
    WebsiteService,
    seed_content,
    slugify,
)


class TestSlugify:
    """Test public path derivation."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("Acme Plumbing", "acme-plumbing"),
            ("  Bob's Café & Bar!! ", "bob-s-caf-bar"),
            ("", "site"),
            ("***", "site"),
        ],
    )
    def test_slugify(self, value, expected):
        assert slugify(value) == expected


class TestWebsiteService:
    """Test WebsiteService persistence."""

    @pytest.mark.asyncio
    async def test_create_seeds_from_profile(self, db_session, profile):
        website = await WebsiteService(db_session).create(profile)

        assert website.path == "acme-plumbing"
        assert website.published is False
        assert website.version == 1
        assert website.content["businessName"] == "Acme Plumbing"
        assert website.content["contactInfo"]["email"] == "owner@acme.example.com"
        assert website.content["contactInfo"]["phone"] == "0400 000 000"
        assert website.content["services"] == [""]

    @pytest.mark.asyncio
    async def test_create_with_content_materializes(self, db_session, profile):
        website = await WebsiteService(db_session).create(profile, content={"aboutUs": "Hi"}, path="acme")

        assert website.path == "acme"
        assert website.content["aboutUs"] == "Hi"
        assert website.content["theme"]["fontFamily"] == "Inter"

    @pytest.mark.asyncio
    async def test_unique_path(self, db_session, profile, other_profile):
        service = WebsiteService(db_session)
        await service.create(profile, path="acme-plumbing")
        other_profile.business_name = "Acme Plumbing"

        website = await service.create(other_profile)

        assert website.path == "acme-plumbing-2"

    @pytest.mark.asyncio
    async def test_get_or_create_is_stable(self, db_session, profile):
        service = WebsiteService(db_session)

        first = await service.get_or_create(profile)
        second = await service.get_or_create(profile)

        assert first.id == second.id

    @pytest.mark.asyncio
    async def test_get_by_path_published_only(self, db_session, profile):
        service = WebsiteService(db_session)
        website = await service.create(profile)

        assert await service.get_by_path(website.path) is None
        assert (await service.get_by_path(website.path, published_only=False)).id == website.id

        await service.set_published(website, True)

        assert (await service.get_by_path(website.path)).id == website.id

    @pytest.mark.asyncio
    async def test_publish_is_idempotent_but_restamps(self, db_session, profile):
        service = WebsiteService(db_session)
        website = await service.create(profile)

        await service.set_published(website, True)
        first_stamp = website.published_at
        await service.set_published(website, True)

        assert website.published is True
        assert website.published_at >= first_stamp

    @pytest.mark.asyncio
    async def test_unpublish(self, db_session, profile):
        service = WebsiteService(db_session)
        website = await service.create(profile)
        await service.set_published(website, True)

        await service.set_published(website, False)

        assert website.published is False
        assert await service.get_by_path(website.path) is None


class TestWebsiteDocumentStore:
    """Test the document store over the websites table."""

    @pytest.mark.asyncio
    async def test_fetch_and_write(self, db_session, profile):
        website = await WebsiteService(db_session).create(profile)
        store = WebsiteDocumentStore(db_session)

        content, version = await store.fetch_versioned(website.id)
        content = dict(content, aboutUs="Since 1990")
        written = await store.write(website.id, content)

        assert written["aboutUs"] == "Since 1990"
        assert (await store.fetch(website.id))["aboutUs"] == "Since 1990"
        assert (await store.fetch_versioned(website.id))[1] == version + 1

    @pytest.mark.asyncio
    async def test_missing_website(self, db_session):
        store = WebsiteDocumentStore(db_session)

        with pytest.raises(DocumentNotFound):
            await store.fetch(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_expected_version_mismatch(self, db_session, profile):
        website = await WebsiteService(db_session).create(profile)
        store = WebsiteDocumentStore(db_session)

        with pytest.raises(VersionConflict):
            await store.write(website.id, {"businessName": "x"}, expected_version=7)

    @pytest.mark.asyncio
    async def test_database_error_is_transport_failure(self, db_session, profile):
        website = await WebsiteService(db_session).create(profile)
        store = WebsiteDocumentStore(db_session)

        with patch.object(
            store.websites,
            "get_by_id",
            AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("connection lost"))),
        ):
            with pytest.raises(TransportFailure):
                await store.fetch(website.id)

    @pytest.mark.asyncio
    async def test_path_update_through_store(self, db_session, profile):
        website = await WebsiteService(db_session).create(profile)
        store = WebsiteDocumentStore(db_session)

        await persist_path_update(store, website.id, ["theme", "primaryColor"], "#ff0000")
        stored = await store.fetch(website.id)

        assert stored["theme"]["primaryColor"] == "#ff0000"
        assert stored["businessName"] == "Acme Plumbing"

    @pytest.mark.asyncio
    async def test_editing_session_over_database(self, db_session, profile):
        website = await WebsiteService(db_session).create(profile)
        session = EditingSession(WebsiteDocumentStore(db_session), website.id)
        await session.load()

        result = await session.save_array(["services"], "update", value="Blocked drains", index=0)

        assert result.ok
        assert result.content["services"] == ["Blocked drains"]


def test_seed_content_handles_missing_details(other_profile_model):
    content = seed_content(other_profile_model)

    assert content["businessName"] == "Bolt Electrical"
    assert content["contactInfo"]["phone"] == ""
    assert content["contactInfo"]["address"] == ""


@pytest.fixture
def other_profile_model():
    from simplebiz.models.profile import Profile

    return Profile(email="hello@bolt.example.com", business_name="Bolt Electrical", password_hash="x")
