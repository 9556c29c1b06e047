from typing import Any, Dict

from app.models import TeamMember
from app.repositories.base import ResourceRepository
from app.schemas import LocalizedText
from app.schemas import TeamMember as TeamMemberDto


class TeamMemberRepository(ResourceRepository[TeamMember, TeamMemberDto]):
    model = TeamMember
    resource_name = "Team member"
    required_fields = ("name", "title.id", "bio.id", "image_url")

    def to_columns(self, data: Dict[str, Any], creating: bool) -> Dict[str, Any]:
        linkedin_url = data.get("linkedin_url")
        return {
            "name": data["name"],
            "title_id": data["title"]["id"],
            "bio_id": data["bio"]["id"],
            "image_url": data["image_url"],
            "linkedin_url": linkedin_url.strip() if linkedin_url else None,
        }

    def to_dto(self, row: TeamMember) -> TeamMemberDto:
        # Only the "id" language is stored
        return TeamMemberDto(
            id=row.id,
            name=row.name,
            title=LocalizedText(id=row.title_id),
            bio=LocalizedText(id=row.bio_id),
            image_url=row.image_url,
            linkedin_url=row.linkedin_url or "",
        )
