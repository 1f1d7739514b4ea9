import logging
from typing import Dict, List, Optional
from uuid import UUID
from sqlalchemy import select, delete, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from clientcontacts.clients.codes import generate_client_code
from clientcontacts.clients.models import Client
from clientcontacts.clients.schemas import ClientCreate, ClientUpdate
from clientcontacts.client_contacts.models import ClientContact
from clientcontacts.contacts.models import Contact
from clientcontacts.exceptions import NotFound, StoreUnavailable, ValidationFailed

logger = logging.getLogger(__name__)


class ClientService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _count_contacts(self, client_ids: List[UUID]) -> Dict[UUID, int]:
        if not client_ids:
            return {}
        result = await self.db.execute(
            select(ClientContact.client_id, func.count(ClientContact.id))
            .where(ClientContact.client_id.in_(client_ids))
            .group_by(ClientContact.client_id)
        )
        return {client_id: count for client_id, count in result.all()}

    async def _with_count(self, client: Client) -> dict:
        counts = await self._count_contacts([client.id])
        return {**client.__dict__, "linked_contacts": counts.get(client.id, 0)}

    async def _get(self, client_id: UUID) -> Client:
        result = await self.db.execute(select(Client).where(Client.id == client_id))
        client = result.scalar_one_or_none()
        if not client:
            raise NotFound("Client not found")
        return client

    async def create_client(self, client_in: ClientCreate) -> dict:
        try:
            code = await generate_client_code(self.db, client_in.name)
            db_client = Client(**client_in.model_dump(), code=code)
            self.db.add(db_client)
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise ValidationFailed("Error creating client", str(e.orig))
        await self.db.refresh(db_client)

        logger.info("Created client %s with code %s", db_client.id, db_client.code)
        return {**db_client.__dict__, "linked_contacts": 0}

    async def list_clients(self, skip: int = 0, limit: Optional[int] = None) -> List[dict]:
        try:
            query = select(Client).order_by(Client.created_at).offset(skip)
            if limit is not None:
                query = query.limit(limit)
            result = await self.db.execute(query)
            clients = list(result.scalars().all())
            counts = await self._count_contacts([c.id for c in clients])
        except SQLAlchemyError as e:
            logger.error(f"Error fetching clients: {e}", exc_info=True)
            raise StoreUnavailable("Error fetching clients", str(e))

        return [
            {**c.__dict__, "linked_contacts": counts.get(c.id, 0)}
            for c in clients
        ]

    async def get_client(self, client_id: UUID) -> dict:
        client = await self._get(client_id)
        return await self._with_count(client)

    async def update_client(self, client_id: UUID, client_in: ClientUpdate) -> dict:
        client = await self._get(client_id)

        update_data = client_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(client, field, value)

        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise ValidationFailed("Error updating client", str(e.orig))
        await self.db.refresh(client)
        return await self._with_count(client)

    async def delete_client(self, client_id: UUID) -> None:
        client = await self._get(client_id)
        try:
            # Links and the client go in one transaction
            await self.db.execute(
                delete(ClientContact).where(ClientContact.client_id == client_id)
            )
            await self.db.delete(client)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise ValidationFailed("Error deleting client", str(e))

        logger.info("Deleted client %s", client_id)

    async def list_client_contacts(self, client_id: UUID) -> List[dict]:
        """Contacts linked to `client_id`. Their own client counts are not computed."""
        try:
            result = await self.db.execute(
                select(Contact)
                .join(ClientContact, ClientContact.contact_id == Contact.id)
                .where(ClientContact.client_id == client_id)
                .order_by(ClientContact.created_at)
            )
            contacts = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching contacts for client {client_id}: {e}", exc_info=True)
            raise StoreUnavailable("Error fetching client contacts", str(e))

        return [{**c.__dict__, "linked_clients": 0} for c in contacts]
