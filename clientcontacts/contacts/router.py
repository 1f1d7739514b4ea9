from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from clientcontacts.database import get_db
from clientcontacts.clients.schemas import ClientResponse
from clientcontacts.contacts.schemas import ContactCreate, ContactUpdate, ContactResponse
from clientcontacts.contacts.service import ContactService
from clientcontacts.shared.schemas import MessageResponse

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.get("", response_model=List[ContactResponse])
async def list_contacts(
    skip: int = 0,
    limit: Optional[int] = None,
    db: AsyncSession = Depends(get_db),
):
    service = ContactService(db)
    return await service.list_contacts(skip, limit)


@router.post("", response_model=ContactResponse, status_code=status.HTTP_201_CREATED)
async def create_contact(
    contact: ContactCreate,
    db: AsyncSession = Depends(get_db),
):
    service = ContactService(db)
    return await service.create_contact(contact)


@router.get("/{contact_id}", response_model=ContactResponse)
async def get_contact(
    contact_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    service = ContactService(db)
    return await service.get_contact(contact_id)


@router.put("/{contact_id}", response_model=ContactResponse)
async def update_contact(
    contact_id: UUID,
    contact: ContactUpdate,
    db: AsyncSession = Depends(get_db),
):
    service = ContactService(db)
    return await service.update_contact(contact_id, contact)


@router.delete("/{contact_id}", response_model=MessageResponse)
async def delete_contact(
    contact_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    service = ContactService(db)
    await service.delete_contact(contact_id)
    return {"message": "Contact deleted successfully"}


@router.get("/{contact_id}/clients", response_model=List[ClientResponse])
async def list_contact_clients(
    contact_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    service = ContactService(db)
    return await service.list_contact_clients(contact_id)
