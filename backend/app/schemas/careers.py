from datetime import datetime
from typing import Optional
from app.schemas.base import CamelModel, LocalizedTextInput, SingleLocaleText


class JobListingInput(CamelModel):
    title: Optional[LocalizedTextInput] = None
    location: Optional[LocalizedTextInput] = None
    type: Optional[str] = None
    description: Optional[LocalizedTextInput] = None
    responsibilities: Optional[LocalizedTextInput] = None
    qualifications: Optional[LocalizedTextInput] = None
    date: Optional[datetime] = None


class JobListing(CamelModel):
    id: str
    title: SingleLocaleText
    location: SingleLocaleText
    type: str
    description: SingleLocaleText
    responsibilities: SingleLocaleText
    qualifications: SingleLocaleText
    date: Optional[str] = None


class JobApplication(CamelModel):
    id: str
    job_id: str
    job_title: Optional[str] = None
    applicant_name: Optional[str] = None
    name: Optional[str] = None
    email: str
    phone: str
    resume: str
    resume_file_name: str
    cover_letter: str = ""
    date: Optional[str] = None
