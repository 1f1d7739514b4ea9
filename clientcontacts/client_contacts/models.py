from sqlalchemy import Column, ForeignKey, UniqueConstraint
from clientcontacts.database import Base
from clientcontacts.shared.models import RecordMixin


class ClientContact(Base, RecordMixin):
    """Link between one client and one contact. At most one row per pair."""
    __tablename__ = "client_contacts"
    __table_args__ = (
        UniqueConstraint("client_id", "contact_id", name="uq_client_contacts_pair"),
    )

    client_id = Column(ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    contact_id = Column(ForeignKey("contacts.id", ondelete="CASCADE"), nullable=False, index=True)
