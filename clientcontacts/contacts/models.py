from sqlalchemy import Column, String
from clientcontacts.database import Base
from clientcontacts.shared.models import RecordMixin


class Contact(Base, RecordMixin):
    __tablename__ = "contacts"

    name = Column(String, nullable=False)
    surname = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
