from app.schemas.base import (
    CamelModel,
    DataResponse,
    LocalizedText,
    LocalizedTextInput,
    OkResponse,
    SingleLocaleText,
)
from app.schemas.news import NewsInput, NewsArticle, NewsListResponse, PageMeta
from app.schemas.careers import JobListingInput, JobListing, JobApplication
from app.schemas.team import TeamMemberInput, TeamMember
from app.schemas.partner import PartnerInput, Partner
from app.schemas.contact import ContactMessageInput, ContactMessage
from app.schemas.upload import UploadedUrl, UploadedUrls, UploadedFile

__all__ = [
    "CamelModel",
    "DataResponse",
    "LocalizedText",
    "LocalizedTextInput",
    "OkResponse",
    "SingleLocaleText",
    "NewsInput",
    "NewsArticle",
    "NewsListResponse",
    "PageMeta",
    "JobListingInput",
    "JobListing",
    "JobApplication",
    "TeamMemberInput",
    "TeamMember",
    "PartnerInput",
    "Partner",
    "ContactMessageInput",
    "ContactMessage",
    "UploadedUrl",
    "UploadedUrls",
    "UploadedFile",
]
