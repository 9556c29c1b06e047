from typing import List, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from app.api.deps import get_public_base_url, get_upload_storage, repository
from app.repositories import PartnerRepository
from app.schemas import DataResponse, OkResponse, Partner, PartnerInput, UploadedFile
from app.services.uploads import PARTNER_LOGOS, UploadStorage, absolute_url

router = APIRouter()


@router.post("/upload-logo", response_model=UploadedFile)
async def upload_partner_logo(
    file: Optional[List[UploadFile]] = File(None),
    storage: UploadStorage = Depends(get_upload_storage),
    base_url: str = Depends(get_public_base_url),
):
    stored = await storage.save_one(PARTNER_LOGOS, file)
    return UploadedFile(url=absolute_url(base_url, stored.public_path), path=stored.public_path)


@router.get("", response_model=DataResponse[List[Partner]])
async def list_partners(
    repo: PartnerRepository = Depends(repository(PartnerRepository)),
):
    return DataResponse(data=await repo.list())


@router.get("/{partner_id}", response_model=DataResponse[Partner])
async def get_partner(
    partner_id: str,
    repo: PartnerRepository = Depends(repository(PartnerRepository)),
):
    return DataResponse(data=await repo.get(partner_id))


@router.post("", response_model=DataResponse[Partner], status_code=201)
async def create_partner(
    payload: PartnerInput,
    repo: PartnerRepository = Depends(repository(PartnerRepository)),
):
    return DataResponse(data=await repo.create(payload.model_dump()))


@router.put("/{partner_id}", response_model=DataResponse[Partner])
async def update_partner(
    partner_id: str,
    payload: PartnerInput,
    repo: PartnerRepository = Depends(repository(PartnerRepository)),
):
    return DataResponse(data=await repo.update(partner_id, payload.model_dump()))


@router.delete("/{partner_id}", response_model=OkResponse)
async def delete_partner(
    partner_id: str,
    repo: PartnerRepository = Depends(repository(PartnerRepository)),
):
    await repo.delete(partner_id)
    return OkResponse()
