from typing import Optional
from app.schemas.base import CamelModel


class PartnerInput(CamelModel):
    name: Optional[str] = None
    logo_url: Optional[str] = None


class Partner(CamelModel):
    id: str
    name: str
    logo_url: str
