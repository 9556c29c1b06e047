from typing import Optional
from app.schemas.base import CamelModel, LocalizedText, LocalizedTextInput


class TeamMemberInput(CamelModel):
    name: Optional[str] = None
    title: Optional[LocalizedTextInput] = None
    bio: Optional[LocalizedTextInput] = None
    image_url: Optional[str] = None
    linkedin_url: Optional[str] = None


class TeamMember(CamelModel):
    id: str
    name: str
    title: LocalizedText
    bio: LocalizedText
    image_url: str
    linkedin_url: str = ""
