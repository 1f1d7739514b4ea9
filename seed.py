import asyncio
from sqlalchemy import select

from clientcontacts.database import AsyncSessionLocal
from clientcontacts.clients.codes import generate_client_code
from clientcontacts.clients.models import Client
from clientcontacts.contacts.models import Contact
from clientcontacts.client_contacts.models import ClientContact

CLIENTS = ["Acme Corp Partners", "Acme Cool Products", "Globex", "First National Bank"]
CONTACTS = [
    ("Jane", "Smith", "jane.smith@example.com"),
    ("John", "Doe", "john.doe@example.com"),
    ("Grace", "Hopper", "grace.hopper@example.com"),
]

async def seed_data():
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(Client).limit(1))
        if result.scalars().first():
            print("Clients already present, skipping seed.")
            return

        clients = []
        for name in CLIENTS:
            # Flush per client so the next code probe sees the previous one
            client = Client(name=name, code=await generate_client_code(session, name))
            session.add(client)
            await session.flush()
            clients.append(client)

        contacts = []
        for name, surname, email in CONTACTS:
            contact = Contact(name=name, surname=surname, email=email)
            session.add(contact)
            contacts.append(contact)
        await session.flush()

        # Acme Corp Partners knows everybody, Globex only Jane
        for contact in contacts:
            session.add(ClientContact(client_id=clients[0].id, contact_id=contact.id))
        session.add(ClientContact(client_id=clients[2].id, contact_id=contacts[0].id))

        await session.commit()
        print("Data seeded successfully!")

if __name__ == "__main__":
    asyncio.run(seed_data())
