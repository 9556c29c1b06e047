"""
Repository layer: one ResourceRepository subclass per table.
"""

from app.repositories.base import ResourceRepository
from app.repositories.news import NewsRepository, clamp_pagination
from app.repositories.careers import JobListingRepository, JobApplicationRepository
from app.repositories.team import TeamMemberRepository
from app.repositories.partners import PartnerRepository
from app.repositories.contact import ContactMessageRepository

__all__ = [
    "ResourceRepository",
    "NewsRepository",
    "clamp_pagination",
    "JobListingRepository",
    "JobApplicationRepository",
    "TeamMemberRepository",
    "PartnerRepository",
    "ContactMessageRepository",
]
