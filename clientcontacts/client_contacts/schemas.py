from datetime import datetime
from uuid import UUID
from clientcontacts.shared.schemas import CamelModel


class ClientContactCreate(CamelModel):
    client_id: UUID
    contact_id: UUID


class ClientContactResponse(CamelModel):
    id: UUID
    client_id: UUID
    contact_id: UUID
    created_at: datetime
