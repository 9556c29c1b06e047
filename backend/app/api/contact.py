from typing import List

from fastapi import APIRouter, Depends

from app.api.deps import repository
from app.repositories import ContactMessageRepository
from app.schemas import ContactMessage, ContactMessageInput, DataResponse, OkResponse

router = APIRouter()


@router.get("", response_model=DataResponse[List[ContactMessage]])
async def list_contact_messages(
    repo: ContactMessageRepository = Depends(repository(ContactMessageRepository)),
):
    return DataResponse(data=await repo.list())


@router.get("/{message_id}", response_model=DataResponse[ContactMessage])
async def get_contact_message(
    message_id: str,
    repo: ContactMessageRepository = Depends(repository(ContactMessageRepository)),
):
    return DataResponse(data=await repo.get(message_id))


@router.post("", response_model=DataResponse[ContactMessage], status_code=201)
async def create_contact_message(
    payload: ContactMessageInput,
    repo: ContactMessageRepository = Depends(repository(ContactMessageRepository)),
):
    """Submitted by the public "Contact Us" form."""
    return DataResponse(data=await repo.create(payload.model_dump()))


@router.put("/{message_id}", response_model=DataResponse[ContactMessage])
async def update_contact_message(
    message_id: str,
    payload: ContactMessageInput,
    repo: ContactMessageRepository = Depends(repository(ContactMessageRepository)),
):
    return DataResponse(data=await repo.update(message_id, payload.model_dump()))


@router.delete("/{message_id}", response_model=OkResponse)
async def delete_contact_message(
    message_id: str,
    repo: ContactMessageRepository = Depends(repository(ContactMessageRepository)),
):
    await repo.delete(message_id)
    return OkResponse()
