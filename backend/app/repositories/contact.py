from typing import Any, Dict

from app.helpers import to_iso
from app.models import ContactMessage
from app.repositories.base import ResourceRepository
from app.schemas import ContactMessage as ContactMessageDto


class ContactMessageRepository(ResourceRepository[ContactMessage, ContactMessageDto]):
    model = ContactMessage
    resource_name = "Contact message"
    required_fields = ("name", "email", "subject", "message")

    def to_columns(self, data: Dict[str, Any], creating: bool) -> Dict[str, Any]:
        return {field: data[field] for field in self.required_fields}

    def to_dto(self, row: ContactMessage) -> ContactMessageDto:
        return ContactMessageDto(
            id=row.id,
            name=row.name,
            email=row.email,
            subject=row.subject,
            message=row.message,
            date=to_iso(row.created_at),
        )
