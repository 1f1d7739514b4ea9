import logging
from typing import Dict, List, Optional
from uuid import UUID
from sqlalchemy import select, delete, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from clientcontacts.clients.models import Client
from clientcontacts.client_contacts.models import ClientContact
from clientcontacts.contacts.models import Contact
from clientcontacts.contacts.schemas import ContactCreate, ContactUpdate
from clientcontacts.exceptions import NotFound, StoreUnavailable, ValidationFailed

logger = logging.getLogger(__name__)


class ContactService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _count_clients(self, contact_ids: List[UUID]) -> Dict[UUID, int]:
        if not contact_ids:
            return {}
        result = await self.db.execute(
            select(ClientContact.contact_id, func.count(ClientContact.id))
            .where(ClientContact.contact_id.in_(contact_ids))
            .group_by(ClientContact.contact_id)
        )
        return {contact_id: count for contact_id, count in result.all()}

    async def _get(self, contact_id: UUID) -> Contact:
        result = await self.db.execute(select(Contact).where(Contact.id == contact_id))
        contact = result.scalar_one_or_none()
        if not contact:
            raise NotFound("Contact not found")
        return contact

    async def create_contact(self, contact_in: ContactCreate) -> dict:
        db_contact = Contact(**contact_in.model_dump())
        self.db.add(db_contact)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise ValidationFailed("Error creating contact", str(e.orig))
        await self.db.refresh(db_contact)

        logger.info("Created contact %s", db_contact.id)
        return {**db_contact.__dict__, "linked_clients": 0}

    async def list_contacts(self, skip: int = 0, limit: Optional[int] = None) -> List[dict]:
        try:
            query = select(Contact).order_by(Contact.created_at).offset(skip)
            if limit is not None:
                query = query.limit(limit)
            result = await self.db.execute(query)
            contacts = list(result.scalars().all())
            counts = await self._count_clients([c.id for c in contacts])
        except SQLAlchemyError as e:
            logger.error(f"Error fetching contacts: {e}", exc_info=True)
            raise StoreUnavailable("Error fetching contacts", str(e))

        return [
            {**c.__dict__, "linked_clients": counts.get(c.id, 0)}
            for c in contacts
        ]

    async def get_contact(self, contact_id: UUID) -> dict:
        contact = await self._get(contact_id)
        counts = await self._count_clients([contact.id])
        return {**contact.__dict__, "linked_clients": counts.get(contact.id, 0)}

    async def update_contact(self, contact_id: UUID, contact_in: ContactUpdate) -> dict:
        contact = await self._get(contact_id)

        for field, value in contact_in.model_dump(exclude_unset=True).items():
            setattr(contact, field, value)

        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise ValidationFailed("Error updating contact", str(e.orig))
        await self.db.refresh(contact)

        counts = await self._count_clients([contact.id])
        return {**contact.__dict__, "linked_clients": counts.get(contact.id, 0)}

    async def delete_contact(self, contact_id: UUID) -> None:
        contact = await self._get(contact_id)
        try:
            await self.db.execute(
                delete(ClientContact).where(ClientContact.contact_id == contact_id)
            )
            await self.db.delete(contact)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise ValidationFailed("Error deleting contact", str(e))

        logger.info("Deleted contact %s", contact_id)

    async def list_contact_clients(self, contact_id: UUID) -> List[dict]:
        try:
            result = await self.db.execute(
                select(Client)
                .join(ClientContact, ClientContact.client_id == Client.id)
                .where(ClientContact.contact_id == contact_id)
                .order_by(ClientContact.created_at)
            )
            clients = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching clients for contact {contact_id}: {e}", exc_info=True)
            raise StoreUnavailable("Error fetching contact clients", str(e))

        return [{**c.__dict__, "linked_contacts": 0} for c in clients]
