import logging
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from clientcontacts.client_contacts.models import ClientContact
from clientcontacts.exceptions import Conflict, NotFound, ValidationFailed

logger = logging.getLogger(__name__)


class ClientContactService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _find(self, client_id: UUID, contact_id: UUID):
        result = await self.db.execute(
            select(ClientContact).where(
                ClientContact.client_id == client_id,
                ClientContact.contact_id == contact_id,
            )
        )
        return result.scalar_one_or_none()

    async def link(self, client_id: UUID, contact_id: UUID) -> ClientContact:
        if await self._find(client_id, contact_id):
            raise Conflict("Contact is already linked to this client")

        link = ClientContact(client_id=client_id, contact_id=contact_id)
        self.db.add(link)
        try:
            await self.db.commit()
        except IntegrityError as e:
            # Lost a race on the pair constraint, or an id that does not exist
            await self.db.rollback()
            raise ValidationFailed("Error linking contact to client", str(e.orig))
        await self.db.refresh(link)

        logger.info("Linked contact %s to client %s", contact_id, client_id)
        return link

    async def unlink(self, client_id: UUID, contact_id: UUID) -> None:
        link = await self._find(client_id, contact_id)
        if not link:
            raise NotFound("Relationship not found")

        try:
            await self.db.delete(link)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise ValidationFailed("Error unlinking contact from client", str(e))

        logger.info("Unlinked contact %s from client %s", contact_id, client_id)
