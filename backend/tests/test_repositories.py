"""
Tests for the content repositories against a throwaway SQLite database.

Tests cover:
- Validation before any statement (required fields, enumerations)
- Pagination clamping and page metadata
- Stored image list decoding
- Publish date handling on update
- Applications joined with their (possibly deleted) job listing
- Delete semantics, statement deadline and storage error wrapping
"""

import asyncio
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import insert
from sqlalchemy.exc import OperationalError

from app.errors import DeadlineExceededError, NotFoundError, StorageError, ValidationError
from app.models import News
from app.repositories import (
    ContactMessageRepository,
    JobApplicationRepository,
    JobListingRepository,
    NewsRepository,
    PartnerRepository,
    TeamMemberRepository,
    clamp_pagination,
)
from app.repositories.news import MAX_PAGE
from app.services.uploads import RESUMES, StoredFile


def news_data(**overrides):
    data = {
        "title": {"id": "Judul", "en": "Title", "cn": None},
        "content": {"id": "Isi", "en": None, "cn": None},
        "category": "company",
        "image_urls": [],
        "date": None,
    }
    data.update(overrides)
    return data


def job_data(**overrides):
    data = {
        "title": {"id": "Insinyur"},
        "location": {"id": "Jakarta"},
        "type": "Full-time",
        "description": {"id": "Deskripsi"},
        "responsibilities": {"id": "Tanggung jawab"},
        "qualifications": {"id": "Kualifikasi"},
        "date": None,
    }
    data.update(overrides)
    return data


def stored_resume(name="cv.pdf") -> StoredFile:
    return StoredFile(
        category=RESUMES,
        filename="cv-1-2.pdf",
        original_filename=name,
        path=Path("/tmp/cv-1-2.pdf"),
        public_path="/uploads/resumes/cv-1-2.pdf",
        size=10,
    )


class TestClampPagination:
    @pytest.mark.parametrize(
        "raw_page,raw_limit,expected",
        [
            (None, None, (1, 10)),
            ("2", "5", (2, 5)),
            ("0", "999", (1, 50)),
            ("-3", "0", (1, 10)),
            ("abc", "xyz", (1, 10)),
            ("3abc", "20px", (3, 20)),
            ("", "", (1, 10)),
            (4, 50, (4, 50)),
            ("99999999999999999999", "10", (MAX_PAGE, 10)),
            ("9" * 5000, "9" * 5000, (MAX_PAGE, 50)),
        ],
    )
    def test_clamp(self, raw_page, raw_limit, expected):
        assert clamp_pagination(raw_page, raw_limit) == expected


class TestValidation:
    @pytest.mark.asyncio
    async def test_missing_fields_named(self, session):
        repo = NewsRepository(session)

        with pytest.raises(ValidationError) as exc_info:
            await repo.create(news_data(title={"id": "  "}, content=None))

        assert exc_info.value.message == "Missing required fields: title.id, content.id"
        assert await repo.count() == 0

    @pytest.mark.asyncio
    async def test_category_enum(self, session):
        repo = NewsRepository(session)

        with pytest.raises(ValidationError) as exc_info:
            await repo.create(news_data(category="blog"))
        assert "category" in exc_info.value.message

        with pytest.raises(ValidationError):
            await repo.create(news_data(category="Company"))

        assert await repo.count() == 0

    @pytest.mark.asyncio
    async def test_job_type_enum(self, session):
        repo = JobListingRepository(session)

        with pytest.raises(ValidationError):
            await repo.create(job_data(type="full-time"))

        assert await repo.list() == []

    @pytest.mark.asyncio
    async def test_required_strings_trimmed(self, session):
        partner = await PartnerRepository(session).create(
            {"name": "  Acme  ", "logo_url": " http://x/logo.png "}
        )

        assert partner.name == "Acme"
        assert partner.logo_url == "http://x/logo.png"

    def test_validate_does_not_mutate_input(self):
        data = {"name": " Acme ", "logo_url": "u"}

        PartnerRepository(session=None).validate(data)

        assert data["name"] == " Acme "


class TestNewsRepository:
    @pytest.mark.asyncio
    async def test_create_fills_defaults(self, session):
        article = await NewsRepository(session).create(news_data())

        assert len(article.id) == 36
        assert article.title.model_dump() == {"id": "Judul", "en": "Title", "cn": ""}
        assert article.content.en == ""
        assert article.image_urls == []
        assert article.date.endswith("Z")

    @pytest.mark.asyncio
    async def test_list_page_orders_newest_first(self, session):
        repo = NewsRepository(session)
        for day in (1, 3, 2):
            await repo.create(
                news_data(title={"id": f"day {day}"}, date=datetime(2024, 5, day, tzinfo=timezone.utc))
            )

        articles, meta = await repo.list_page(1, 2)

        assert [article.title.id for article in articles] == ["day 3", "day 2"]
        assert meta.model_dump() == {"page": 1, "limit": 2, "total": 3, "total_pages": 2}

        articles, _ = await repo.list_page(2, 2)
        assert [article.title.id for article in articles] == ["day 1"]

    @pytest.mark.asyncio
    async def test_empty_page_meta(self, session):
        articles, meta = await NewsRepository(session).list_page(1, 10)

        assert articles == []
        assert meta.total == 0
        assert meta.total_pages == 1

    @pytest.mark.asyncio
    async def test_last_possible_page(self, session):
        await NewsRepository(session).create(news_data())

        articles, meta = await NewsRepository(session).list_page(MAX_PAGE, 50)

        assert articles == []
        assert meta.page == MAX_PAGE

    @pytest.mark.asyncio
    async def test_date_rendered_in_utc(self, session):
        article = await NewsRepository(session).create(
            news_data(date=datetime.fromisoformat("2024-05-01T15:30:00+07:00"))
        )

        assert article.date == "2024-05-01T08:30:00.000Z"

    @pytest.mark.asyncio
    async def test_image_urls_single_string(self, session):
        article = await NewsRepository(session).create(news_data(image_urls="http://a/1.jpg"))

        assert article.image_urls == ["http://a/1.jpg"]

    @pytest.mark.parametrize(
        "stored,expected",
        [
            ('["http://a/1.jpg", "http://a/2.jpg"]', ["http://a/1.jpg", "http://a/2.jpg"]),
            ('"http://a/1.jpg"', ["http://a/1.jpg"]),
            ("http://a/1.jpg, http://a/2.jpg", ["http://a/1.jpg", "http://a/2.jpg"]),
            ("", []),
            (None, []),
        ],
    )
    @pytest.mark.asyncio
    async def test_legacy_stored_image_urls(self, session, stored, expected):
        await session.execute(
            insert(News).values(
                id="legacy",
                title_id="Judul",
                content_id="Isi",
                category="press",
                image_urls=stored,
            )
        )
        await session.commit()

        article = await NewsRepository(session).get("legacy")

        assert article.image_urls == expected

    @pytest.mark.asyncio
    async def test_update_without_date_keeps_publish_date(self, session):
        repo = NewsRepository(session)
        created = await repo.create(news_data(date=datetime(2024, 1, 2, tzinfo=timezone.utc)))

        updated = await repo.update(created.id, news_data(title={"id": "Baru"}, category="press"))

        assert updated.title.id == "Baru"
        assert updated.category == "press"
        assert updated.date == created.date == "2024-01-02T00:00:00.000Z"

    @pytest.mark.asyncio
    async def test_update_with_date(self, session):
        repo = NewsRepository(session)
        created = await repo.create(news_data(date=datetime(2024, 1, 2, tzinfo=timezone.utc)))

        updated = await repo.update(
            created.id, news_data(date=datetime(2024, 6, 1, tzinfo=timezone.utc))
        )

        assert updated.date == "2024-06-01T00:00:00.000Z"

    @pytest.mark.asyncio
    async def test_update_missing(self, session):
        with pytest.raises(NotFoundError) as exc_info:
            await NewsRepository(session).update("missing", news_data())

        assert exc_info.value.message == "News not found"

    @pytest.mark.asyncio
    async def test_update_validates_first(self, session):
        repo = NewsRepository(session)
        created = await repo.create(news_data())

        with pytest.raises(ValidationError):
            await repo.update(created.id, news_data(category="blog"))

        assert (await repo.get(created.id)).category == "company"


class TestCareers:
    @pytest.mark.asyncio
    async def test_job_roundtrip(self, session):
        repo = JobListingRepository(session)
        job = await repo.create(job_data(date=datetime(2024, 3, 1, tzinfo=timezone.utc)))

        fetched = await repo.get(job.id)

        assert fetched.title.id == "Insinyur"
        assert fetched.type == "Full-time"
        assert fetched.date == "2024-03-01T00:00:00.000Z"

    @pytest.mark.asyncio
    async def test_application_includes_job_title(self, session):
        job = await JobListingRepository(session).create(job_data())
        repo = JobApplicationRepository(session)

        application = await repo.submit(
            {
                "job_id": job.id,
                "name": "Ada",
                "email": "ada@example.com",
                "phone": "0812",
                "cover_letter": None,
            },
            stored_resume("My CV.pdf"),
        )

        assert application.job_title == "Insinyur"
        assert application.applicant_name == "Ada"
        assert application.name == "Ada"
        assert application.resume == "/uploads/resumes/cv-1-2.pdf"
        assert application.resume_file_name == "My CV.pdf"
        assert application.cover_letter == ""

    @pytest.mark.asyncio
    async def test_application_survives_job_delete(self, session):
        job_repo = JobListingRepository(session)
        job = await job_repo.create(job_data())
        repo = JobApplicationRepository(session)
        await repo.submit(
            {"job_id": job.id, "name": "Ada", "email": "a@b.c", "phone": "1"},
            stored_resume(),
        )

        await job_repo.delete(job.id)
        applications = await repo.list()

        assert len(applications) == 1
        assert applications[0].job_id == job.id
        assert applications[0].job_title is None

    @pytest.mark.asyncio
    async def test_application_required_fields(self, session):
        repo = JobApplicationRepository(session)

        with pytest.raises(ValidationError) as exc_info:
            repo.validate({"job_id": "x", "name": "", "email": None, "phone": "1"})

        assert exc_info.value.message == "Missing required fields: name, email"


class TestTeamPartnersContact:
    @pytest.mark.asyncio
    async def test_team_member_mapping(self, session):
        member = await TeamMemberRepository(session).create(
            {
                "name": "Ada",
                "title": {"id": "Direktur", "en": "Director"},
                "bio": {"id": "Bio"},
                "image_url": "http://x/team/ada.jpg",
                "linkedin_url": None,
            }
        )

        assert member.title.model_dump() == {"id": "Direktur", "en": "", "cn": ""}
        assert member.linkedin_url == ""

    @pytest.mark.asyncio
    async def test_contact_message_date(self, session):
        message = await ContactMessageRepository(session).create(
            {"name": "Ada", "email": "a@b.c", "subject": "Hi", "message": "Hello"}
        )

        assert message.date.endswith("Z")
        assert (await ContactMessageRepository(session).list())[0].id == message.id

    @pytest.mark.asyncio
    async def test_delete_then_get(self, session):
        repo = PartnerRepository(session)
        partner = await repo.create({"name": "Acme", "logo_url": "http://x/logo.png"})

        await repo.delete(partner.id)

        with pytest.raises(NotFoundError) as exc_info:
            await repo.get(partner.id)
        assert exc_info.value.message == "Partner not found"

    @pytest.mark.asyncio
    async def test_delete_missing(self, session):
        with pytest.raises(NotFoundError):
            await PartnerRepository(session).delete("missing")


class TestStorageFailures:
    @pytest.mark.asyncio
    async def test_statement_deadline(self, session):
        async def slow_execute(*args, **kwargs):
            await asyncio.sleep(1)

        repo = PartnerRepository(session, statement_timeout=0.05)
        with patch.object(session, "execute", slow_execute):
            with pytest.raises(DeadlineExceededError):
                await repo.list()

    @pytest.mark.asyncio
    async def test_driver_error_wrapped(self, session):
        failure = OperationalError("SELECT 1", {}, Exception("connection lost"))

        repo = PartnerRepository(session)
        with patch.object(session, "execute", AsyncMock(side_effect=failure)):
            with pytest.raises(StorageError) as exc_info:
                await repo.get("anything")

        assert "connection lost" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_delete_confirmed_by_lookup(self, session):
        repo = PartnerRepository(session)
        partner = await repo.create({"name": "Acme", "logo_url": "http://x/logo.png"})

        with patch.object(repo, "_fetch_row", AsyncMock(return_value=("still here",))):
            with pytest.raises(StorageError) as exc_info:
                await repo.delete(partner.id)

        assert exc_info.value.message == "Failed to delete partner"
