from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from clientcontacts.database import get_db
from clientcontacts.client_contacts.schemas import ClientContactCreate, ClientContactResponse
from clientcontacts.client_contacts.service import ClientContactService
from clientcontacts.shared.schemas import MessageResponse

router = APIRouter(prefix="/client-contacts", tags=["client-contacts"])


@router.post("", response_model=ClientContactResponse, status_code=status.HTTP_201_CREATED)
async def link_contact(
    link: ClientContactCreate,
    db: AsyncSession = Depends(get_db),
):
    service = ClientContactService(db)
    return await service.link(link.client_id, link.contact_id)


@router.delete("/{client_id}/{contact_id}", response_model=MessageResponse)
async def unlink_contact(
    client_id: UUID,
    contact_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    service = ClientContactService(db)
    await service.unlink(client_id, contact_id)
    return {"message": "Contact unlinked from client successfully"}
