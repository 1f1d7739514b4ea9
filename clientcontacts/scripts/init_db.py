import asyncio
from clientcontacts.database import engine, Base

# Import all models to ensure they are registered in Base.metadata
from clientcontacts.clients.models import Client  # noqa: F401
from clientcontacts.contacts.models import Contact  # noqa: F401
from clientcontacts.client_contacts.models import ClientContact  # noqa: F401

async def init_models(drop: bool = False):
    async with engine.begin() as conn:
        if drop:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    print("Database tables created.")

if __name__ == "__main__":
    asyncio.run(init_models())
