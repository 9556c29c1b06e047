from typing import Any, Dict

from app.models import Partner
from app.repositories.base import ResourceRepository
from app.schemas import Partner as PartnerDto


class PartnerRepository(ResourceRepository[Partner, PartnerDto]):
    model = Partner
    resource_name = "Partner"
    required_fields = ("name", "logo_url")

    def to_columns(self, data: Dict[str, Any], creating: bool) -> Dict[str, Any]:
        return {"name": data["name"], "logo_url": data["logo_url"]}

    def to_dto(self, row: Partner) -> PartnerDto:
        return PartnerDto(id=row.id, name=row.name, logo_url=row.logo_url)
