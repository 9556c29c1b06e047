from app.models.news import News, NEWS_CATEGORIES
from app.models.careers import JobListing, JobApplication, JOB_TYPES
from app.models.team import TeamMember
from app.models.partner import Partner
from app.models.contact import ContactMessage

__all__ = [
    "News",
    "NEWS_CATEGORIES",
    "JobListing",
    "JobApplication",
    "JOB_TYPES",
    "TeamMember",
    "Partner",
    "ContactMessage",
]
