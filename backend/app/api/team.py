from typing import List, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from app.api.deps import get_public_base_url, get_upload_storage, repository
from app.repositories import TeamMemberRepository
from app.schemas import DataResponse, OkResponse, TeamMember, TeamMemberInput, UploadedFile
from app.services.uploads import TEAM_PHOTOS, UploadStorage, absolute_url

router = APIRouter()


@router.post("/upload-image", response_model=UploadedFile)
async def upload_team_image(
    file: Optional[List[UploadFile]] = File(None),
    storage: UploadStorage = Depends(get_upload_storage),
    base_url: str = Depends(get_public_base_url),
):
    """Store one team photo; `url` can be used directly as imageUrl."""
    stored = await storage.save_one(TEAM_PHOTOS, file)
    return UploadedFile(url=absolute_url(base_url, stored.public_path), path=stored.public_path)


@router.get("", response_model=DataResponse[List[TeamMember]])
async def list_team(
    repo: TeamMemberRepository = Depends(repository(TeamMemberRepository)),
):
    return DataResponse(data=await repo.list())


@router.get("/{member_id}", response_model=DataResponse[TeamMember])
async def get_team_member(
    member_id: str,
    repo: TeamMemberRepository = Depends(repository(TeamMemberRepository)),
):
    return DataResponse(data=await repo.get(member_id))


@router.post("", response_model=DataResponse[TeamMember], status_code=201)
async def create_team_member(
    payload: TeamMemberInput,
    repo: TeamMemberRepository = Depends(repository(TeamMemberRepository)),
):
    return DataResponse(data=await repo.create(payload.model_dump()))


@router.put("/{member_id}", response_model=DataResponse[TeamMember])
async def update_team_member(
    member_id: str,
    payload: TeamMemberInput,
    repo: TeamMemberRepository = Depends(repository(TeamMemberRepository)),
):
    return DataResponse(data=await repo.update(member_id, payload.model_dump()))


@router.delete("/{member_id}", response_model=OkResponse)
async def delete_team_member(
    member_id: str,
    repo: TeamMemberRepository = Depends(repository(TeamMemberRepository)),
):
    await repo.delete(member_id)
    return OkResponse()
