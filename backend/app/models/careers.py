"""
Careers Models - job listings and the applications submitted for them

JobApplication.job_id is a soft reference: there is no foreign key, and
deleting a listing leaves its applications in place.
"""

from sqlalchemy import Column, String, Text, DateTime
from app.database import Base
from app.helpers import generate_id, utcnow

JOB_TYPES = ("Full-time", "Part-time", "Contract", "Internship")


class JobListing(Base):
    """
    Open position. Single-locale: only the "id" language columns exist.

    Attributes:
        job_type: One of JOB_TYPES
        published_at: Publication timestamp, defaults to creation time
    """

    __tablename__ = "job_listings"

    id = Column(String(36), primary_key=True, default=generate_id)
    title_id = Column(String(500), nullable=False)
    location_id = Column(String(500), nullable=False)
    job_type = Column(String(20), nullable=False)
    description_id = Column(Text, nullable=False)
    responsibilities_id = Column(Text, nullable=False)
    qualifications_id = Column(Text, nullable=False)
    published_at = Column(DateTime, nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)


class JobApplication(Base):
    """
    Candidate application with an uploaded resume.

    Attributes:
        applicant_name: Legacy column, kept equal to name
        resume_url: Public path of the stored resume file
        resume_filename: Filename as uploaded by the candidate
        cover_letter: Optional free text
    """

    __tablename__ = "job_applications"

    id = Column(String(36), primary_key=True, default=generate_id)
    job_id = Column(String(36), nullable=False, index=True)
    applicant_name = Column(String(255), nullable=True)
    name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    resume_url = Column(String(1000), nullable=False)
    resume_filename = Column(String(500), nullable=False)
    cover_letter = Column(Text, nullable=True)
    applied_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
