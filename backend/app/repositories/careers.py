from typing import Any, Dict, Sequence

from sqlalchemy import Select, func, select

from app.helpers import to_iso, to_naive_utc, utcnow
from app.models import JobApplication, JobListing, JOB_TYPES
from app.repositories.base import ResourceRepository
from app.schemas import JobApplication as JobApplicationDto
from app.schemas import JobListing as JobListingDto
from app.schemas import SingleLocaleText
from app.services.uploads import StoredFile

LOCALIZED_JOB_FIELDS = ("title", "location", "description", "responsibilities", "qualifications")


class JobListingRepository(ResourceRepository[JobListing, JobListingDto]):
    model = JobListing
    resource_name = "Job"
    required_fields = (
        "title.id",
        "location.id",
        "type",
        "description.id",
        "responsibilities.id",
        "qualifications.id",
    )
    enum_fields = {"type": JOB_TYPES}

    def order_by(self) -> Sequence[Any]:
        return [func.coalesce(JobListing.published_at, JobListing.created_at).desc()]

    def to_columns(self, data: Dict[str, Any], creating: bool) -> Dict[str, Any]:
        columns = {f"{field}_id": data[field]["id"] for field in LOCALIZED_JOB_FIELDS}
        columns["job_type"] = data["type"]
        if data.get("date") is not None:
            columns["published_at"] = to_naive_utc(data["date"])
        elif creating:
            columns["published_at"] = utcnow()
        return columns

    def to_dto(self, row: JobListing) -> JobListingDto:
        return JobListingDto(
            id=row.id,
            title=SingleLocaleText(id=row.title_id),
            location=SingleLocaleText(id=row.location_id),
            type=row.job_type,
            description=SingleLocaleText(id=row.description_id),
            responsibilities=SingleLocaleText(id=row.responsibilities_id),
            qualifications=SingleLocaleText(id=row.qualifications_id),
            date=to_iso(row.published_at or row.created_at),
        )


class JobApplicationRepository(ResourceRepository[JobApplication, JobApplicationDto]):
    """
    Applications reference their listing by job_id without a foreign key;
    the listing title is looked up with an outer join and is None once the
    listing has been deleted.
    """

    model = JobApplication
    resource_name = "Application"
    required_fields = ("job_id", "name", "email", "phone")

    def base_query(self) -> Select:
        return select(JobApplication, JobListing.title_id).outerjoin(
            JobListing, JobListing.id == JobApplication.job_id
        )

    def order_by(self) -> Sequence[Any]:
        return [JobApplication.applied_at.desc()]

    def to_columns(self, data: Dict[str, Any], creating: bool) -> Dict[str, Any]:
        return {
            "job_id": data["job_id"],
            # applicant_name is the legacy copy of name
            "applicant_name": data["name"],
            "name": data["name"],
            "email": data["email"],
            "phone": data["phone"],
            "resume_url": data["resume_url"],
            "resume_filename": data["resume_filename"],
            "cover_letter": data.get("cover_letter") or None,
        }

    def map_row(self, row: Any) -> JobApplicationDto:
        application, job_title = row
        dto = self.to_dto(application)
        dto.job_title = job_title
        return dto

    def to_dto(self, row: JobApplication) -> JobApplicationDto:
        return JobApplicationDto(
            id=row.id,
            job_id=row.job_id,
            applicant_name=row.applicant_name,
            name=row.name,
            email=row.email,
            phone=row.phone,
            resume=row.resume_url,
            resume_file_name=row.resume_filename,
            cover_letter=row.cover_letter or "",
            date=to_iso(row.applied_at),
        )

    async def submit(self, data: Dict[str, Any], resume: StoredFile) -> JobApplicationDto:
        """Create an application for an already stored resume file."""
        return await self.create(
            {
                **data,
                "resume_url": resume.public_path,
                "resume_filename": resume.original_filename,
            }
        )
