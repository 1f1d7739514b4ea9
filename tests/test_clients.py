import re
import uuid
import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from clientcontacts.client_contacts.models import ClientContact
from clientcontacts.clients.models import Client

CODE_PATTERN = re.compile(r"^[A-Z]{3}[0-9]{3}$")


@pytest.mark.asyncio
async def test_create_client(async_client: AsyncClient):
    response = await async_client.post("/api/clients", json={"name": "Acme Corp Partners"})
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Acme Corp Partners"
    assert data["code"] == "ACP001"
    assert data["linkedContacts"] == 0
    uuid.UUID(data["id"])


@pytest.mark.asyncio
async def test_prefix_collision_increments_suffix(create_client):
    first = await create_client("Acme Corp Partners")
    second = await create_client("Acme Cool Products")
    third = await create_client("Another Cool Place")
    assert [first["code"], second["code"], third["code"]] == ["ACP001", "ACP002", "ACP003"]


@pytest.mark.asyncio
async def test_generated_codes_are_well_formed(create_client):
    for name in ["Globex", "Jo", "X", "   ", "Initech Software", "a b c d"]:
        client = await create_client(name)
        assert CODE_PATTERN.match(client["code"]), client


@pytest.mark.asyncio
async def test_create_client_requires_name(async_client: AsyncClient):
    response = await async_client.post("/api/clients", json={})
    assert response.status_code == 400
    assert response.json()["detail"]["message"] == "Validation error"

    response = await async_client.post("/api/clients", json={"name": ""})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_create_client_duplicate_name(async_client: AsyncClient, create_client):
    await create_client("Globex")
    response = await async_client.post("/api/clients", json={"name": "Globex"})
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["message"] == "Error creating client"
    assert detail["error"]


@pytest.mark.asyncio
async def test_list_clients_with_counts(async_client: AsyncClient, create_client, create_contact, link):
    acme = await create_client("Acme Corp Partners")
    globex = await create_client("Globex")
    jane = await create_contact("Jane", "Smith", "jane@example.com")
    john = await create_contact("John", "Doe", "john@example.com")
    await link(acme["id"], jane["id"])
    await link(acme["id"], john["id"])
    await link(globex["id"], jane["id"])

    response = await async_client.get("/api/clients")
    assert response.status_code == 200
    counts = {c["name"]: c["linkedContacts"] for c in response.json()}
    assert counts == {"Acme Corp Partners": 2, "Globex": 1}


@pytest.mark.asyncio
async def test_list_clients_skip_limit(async_client: AsyncClient, create_client):
    for name in ["Alpha", "Beta", "Gamma"]:
        await create_client(name)

    response = await async_client.get("/api/clients", params={"skip": 1, "limit": 1})
    assert response.status_code == 200
    assert len(response.json()) == 1


@pytest.mark.asyncio
async def test_list_clients_store_error(async_client: AsyncClient, db_session: AsyncSession, monkeypatch):
    async def broken_execute(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection lost"))

    monkeypatch.setattr(db_session, "execute", broken_execute)

    response = await async_client.get("/api/clients")
    assert response.status_code == 500
    assert response.json()["detail"]["message"] == "Error fetching clients"


@pytest.mark.asyncio
async def test_get_client(async_client: AsyncClient, create_client):
    client = await create_client("Globex")

    response = await async_client.get(f"/api/clients/{client['id']}")
    assert response.status_code == 200
    assert response.json() == client

    response = await async_client.get(f"/api/clients/{uuid.uuid4()}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_client(async_client: AsyncClient, create_client, create_contact, link):
    client = await create_client("Globex")
    contact = await create_contact("Jane", "Smith", "jane@example.com")
    await link(client["id"], contact["id"])

    response = await async_client.put(
        f"/api/clients/{client['id']}",
        json={"name": "Globex Corporation", "code": "ZZZ999"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Globex Corporation"
    assert data["code"] == "GLO001"
    assert data["linkedContacts"] == 1


@pytest.mark.asyncio
async def test_update_client_not_found(async_client: AsyncClient):
    response = await async_client.put(f"/api/clients/{uuid.uuid4()}", json={"name": "Nobody"})
    assert response.status_code == 404
    assert response.json()["detail"]["message"] == "Client not found"


@pytest.mark.asyncio
async def test_update_client_duplicate_name(async_client: AsyncClient, create_client):
    await create_client("Globex")
    initech = await create_client("Initech")

    response = await async_client.put(f"/api/clients/{initech['id']}", json={"name": "Globex"})
    assert response.status_code == 400
    assert response.json()["detail"]["message"] == "Error updating client"


@pytest.mark.asyncio
async def test_malformed_client_id(async_client: AsyncClient):
    response = await async_client.put("/api/clients/not-a-uuid", json={"name": "X"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_client_cascades_links(
    async_client: AsyncClient, db_session: AsyncSession, create_client, create_contact, link
):
    client = await create_client("Globex")
    other = await create_client("Initech")
    jane = await create_contact("Jane", "Smith", "jane@example.com")
    john = await create_contact("John", "Doe", "john@example.com")
    await link(client["id"], jane["id"])
    await link(client["id"], john["id"])
    await link(other["id"], jane["id"])

    response = await async_client.delete(f"/api/clients/{client['id']}")
    assert response.status_code == 200
    assert response.json() == {"message": "Client deleted successfully"}

    result = await db_session.execute(
        select(ClientContact).where(ClientContact.client_id == uuid.UUID(client["id"]))
    )
    assert result.scalars().all() == []

    response = await async_client.get(f"/api/clients/{client['id']}/contacts")
    assert response.json() == []

    contacts = {c["email"]: c["linkedClients"] for c in (await async_client.get("/api/contacts")).json()}
    assert contacts == {"jane@example.com": 1, "john@example.com": 0}


@pytest.mark.asyncio
async def test_delete_client_not_found(async_client: AsyncClient, create_client):
    client = await create_client("Globex")
    assert (await async_client.delete(f"/api/clients/{client['id']}")).status_code == 200

    response = await async_client.delete(f"/api/clients/{client['id']}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_client_contacts(async_client: AsyncClient, create_client, create_contact, link):
    client = await create_client("Globex")
    jane = await create_contact("Jane", "Smith", "jane@example.com")
    await create_contact("John", "Doe", "john@example.com")
    await link(client["id"], jane["id"])

    response = await async_client.get(f"/api/clients/{client['id']}/contacts")
    assert response.status_code == 200
    assert response.json() == [
        {
            "id": jane["id"],
            "name": "Jane",
            "surname": "Smith",
            "email": "jane@example.com",
            "linkedClients": 0,
        }
    ]


@pytest.mark.asyncio
async def test_list_contacts_of_unknown_client_is_empty(async_client: AsyncClient):
    response = await async_client.get(f"/api/clients/{uuid.uuid4()}/contacts")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_codes_for_names_with_digits_accents_and_punctuation(create_client):
    codes = [
        (await create_client(name))["code"]
        for name in ["3M Company", "Émile Zola", "O'Neil & Co"]
    ]
    assert codes == ["MCO001", "EZO001", "OCO001"]


@pytest.mark.asyncio
async def test_failed_delete_keeps_client_and_links(
    async_client: AsyncClient, db_session: AsyncSession, create_client, create_contact, link, monkeypatch
):
    client = await create_client("Globex")
    contact = await create_contact("Jane", "Smith", "jane@example.com")
    await link(client["id"], contact["id"])

    async def broken_commit():
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db_session, "commit", broken_commit)
    response = await async_client.delete(f"/api/clients/{client['id']}")
    assert response.status_code == 400
    assert response.json()["detail"]["message"] == "Error deleting client"
    monkeypatch.undo()

    response = await async_client.get(f"/api/clients/{client['id']}")
    assert response.status_code == 200
    assert response.json()["linkedContacts"] == 1


@pytest.mark.asyncio
async def test_update_bumps_updated_at(async_client: AsyncClient, db_session: AsyncSession, create_client):
    client = await create_client("Globex")
    await async_client.put(f"/api/clients/{client['id']}", json={"name": "Globex Corporation"})

    result = await db_session.execute(select(Client).where(Client.id == uuid.UUID(client["id"])))
    row = result.scalar_one()
    assert row.name == "Globex Corporation"
    assert row.updated_at >= row.created_at
