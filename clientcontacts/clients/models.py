from sqlalchemy import Column, String
from clientcontacts.database import Base
from clientcontacts.shared.models import RecordMixin


class Client(Base, RecordMixin):
    """Customer entity, identified by a unique name and a generated code."""
    __tablename__ = "clients"

    name = Column(String, nullable=False, unique=True)
    code = Column(String, nullable=False, unique=True, index=True)
