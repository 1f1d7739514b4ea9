from fastapi import APIRouter

from clientcontacts.clients.router import router as clients_router
from clientcontacts.contacts.router import router as contacts_router
from clientcontacts.client_contacts.router import router as client_contacts_router

api_router = APIRouter()

api_router.include_router(clients_router)
api_router.include_router(contacts_router)
api_router.include_router(client_contacts_router)
