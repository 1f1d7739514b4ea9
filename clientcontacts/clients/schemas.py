from uuid import UUID
from typing import Optional
from pydantic import Field
from clientcontacts.shared.schemas import CamelModel

class ClientBase(CamelModel):
    name: str = Field(min_length=1)

class ClientCreate(ClientBase):
    pass

class ClientUpdate(CamelModel):
    # `code` is immutable after creation
    name: Optional[str] = Field(default=None, min_length=1)

class ClientResponse(ClientBase):
    id: UUID
    code: str
    linked_contacts: int = 0
