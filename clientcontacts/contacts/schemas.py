from uuid import UUID
from typing import Optional
from pydantic import EmailStr, Field
from clientcontacts.shared.schemas import CamelModel

class ContactBase(CamelModel):
    name: str = Field(min_length=1)
    surname: str = Field(min_length=1)
    email: EmailStr

class ContactCreate(ContactBase):
    pass

class ContactUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    surname: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None

class ContactResponse(CamelModel):
    id: UUID
    name: str
    surname: str
    email: str
    linked_clients: int = 0
