from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from clientcontacts.database import get_db
from clientcontacts.clients.schemas import ClientCreate, ClientUpdate, ClientResponse
from clientcontacts.clients.service import ClientService
from clientcontacts.contacts.schemas import ContactResponse
from clientcontacts.shared.schemas import MessageResponse

router = APIRouter(prefix="/clients", tags=["clients"])


@router.get("", response_model=List[ClientResponse])
async def list_clients(
    skip: int = 0,
    limit: Optional[int] = None,
    db: AsyncSession = Depends(get_db),
):
    service = ClientService(db)
    return await service.list_clients(skip, limit)


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    client: ClientCreate,
    db: AsyncSession = Depends(get_db),
):
    service = ClientService(db)
    return await service.create_client(client)


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    service = ClientService(db)
    return await service.get_client(client_id)


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: UUID,
    client: ClientUpdate,
    db: AsyncSession = Depends(get_db),
):
    service = ClientService(db)
    return await service.update_client(client_id, client)


@router.delete("/{client_id}", response_model=MessageResponse)
async def delete_client(
    client_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    service = ClientService(db)
    await service.delete_client(client_id)
    return {"message": "Client deleted successfully"}


@router.get("/{client_id}/contacts", response_model=List[ContactResponse])
async def list_client_contacts(
    client_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    service = ClientService(db)
    return await service.list_client_contacts(client_id)
