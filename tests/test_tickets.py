from __future__ import annotations

import pytest
from httpx import AsyncClient

from conftest import create_column, create_ticket
from taskboard.db.models import Ticket

MISSING_ID = "3275b578-1b4b-454b-8d0e-d539e69cfafa"


@pytest.mark.anyio
async def test_list_tickets(client: AsyncClient) -> None:
    assert (await client.get("/tickets")).json() == []

    ticket = await create_ticket(client, "Write docs", description="For the API")
    res = await client.get("/tickets")
    assert res.status_code == 200, res.text
    body = res.json()
    assert len(body) == 1
    assert body[0]["id"] == ticket["id"]
    assert body[0]["ticketName"] == "Write docs"
    assert body[0]["description"] == "For the API"
    assert body[0]["priority"] == "critical"
    assert body[0]["done"] is False


@pytest.mark.anyio
async def test_get_ticket(client: AsyncClient) -> None:
    ticket = await create_ticket(client, priority="low")

    res = await client.get(f"/tickets/{ticket['id']}")
    assert res.status_code == 200, res.text
    assert res.json()["priority"] == "low"

    res = await client.get(f"/tickets/{MISSING_ID}")
    assert res.status_code == 404
    assert res.json() == f"Ticket with id '{MISSING_ID}' not found"


@pytest.mark.anyio
async def test_create_ticket_requires_name_and_priority(client: AsyncClient) -> None:
    expected = "Creating a Ticket requires the following mandatory fields: ticketName, priority"

    res = await client.post("/tickets", json={})
    assert res.status_code == 400
    assert res.json() == expected

    res = await client.post("/tickets")
    assert res.status_code == 400
    assert res.json() == expected

    res = await client.post("/tickets", json={"ticketName": "Only a name"})
    assert res.status_code == 400
    assert res.json() == "Creating a Ticket requires the following mandatory fields: priority"


@pytest.mark.anyio
async def test_create_ticket_rejects_unknown_priority(client: AsyncClient) -> None:
    res = await client.post("/tickets", json={"ticketName": "T", "priority": "urgent"})
    assert res.status_code == 400
    assert res.json() == "Invalid value for field(s): priority"


@pytest.mark.anyio
async def test_create_ticket_in_column(client: AsyncClient) -> None:
    column = await create_column(client)

    res = await client.post(
        "/tickets",
        json={"ticketName": "Ship it", "priority": "high", "columnId": column["id"], "done": True},
    )
    assert res.status_code == 201, res.text
    ticket = res.json()
    assert ticket["columnId"] == column["id"]
    assert ticket["done"] is True
    assert ticket["description"] is None

    res = await client.post("/tickets", json={"ticketName": "Lost", "priority": "high", "columnId": MISSING_ID})
    assert res.status_code == 404
    assert res.json() == f"Column with id '{MISSING_ID}' not found"


@pytest.mark.anyio
async def test_update_ticket(client: AsyncClient) -> None:
    ticket = await create_ticket(client, "Original", description="notes")

    res = await client.put(f"/tickets/{ticket['id']}", json={"ticketName": "Updated", "done": True})
    assert res.status_code == 200, res.text
    body = res.json()
    assert body["updateResult"]["affected"] == 1
    updated = body["updatedTicket"]
    assert updated["id"] == ticket["id"]
    assert updated["ticketName"] == "Updated"
    assert updated["done"] is True
    assert updated["description"] == "notes"

    res = await client.put(f"/tickets/{ticket['id']}", json={"description": None})
    assert res.status_code == 200, res.text
    assert res.json()["updatedTicket"]["description"] is None


@pytest.mark.anyio
async def test_update_ticket_errors(client: AsyncClient) -> None:
    ticket = await create_ticket(client)

    res = await client.put(f"/tickets/{ticket['id']}")
    assert res.status_code == 400
    assert res.json() == "Please specify a request body"

    res = await client.put(f"/tickets/{ticket['id']}", json={"priority": "urgent"})
    assert res.status_code == 400

    res = await client.put(f"/tickets/{MISSING_ID}", json={"ticketName": "x"})
    assert res.status_code == 404
    assert res.json() == f"Ticket with id '{MISSING_ID}' not found"

    stored = (await client.get(f"/tickets/{ticket['id']}")).json()
    assert stored == ticket


@pytest.mark.anyio
async def test_delete_ticket(client: AsyncClient) -> None:
    ticket = await create_ticket(client)

    res = await client.delete(f"/tickets/{ticket['id']}")
    assert res.status_code == 204
    assert (await client.get(f"/tickets/{ticket['id']}")).status_code == 404

    res = await client.delete(f"/tickets/{MISSING_ID}")
    assert res.status_code == 404
    assert res.json() == f"Ticket with id '{MISSING_ID}' not found"


@pytest.mark.anyio
async def test_ticket_defaults_apply_to_rows_created_directly(db) -> None:
    ticket = Ticket(ticket_name="Direct")
    db.add(ticket)
    await db.commit()
    await db.refresh(ticket)

    assert ticket.id
    assert ticket.priority == "medium"
    assert ticket.done is False
    assert ticket.column_id is None
    assert ticket.created_at is not None


@pytest.mark.anyio
async def test_blank_column_id_is_rejected(client: AsyncClient) -> None:
    res = await client.post("/tickets", json={"ticketName": "t", "priority": "low", "columnId": ""})
    assert res.status_code == 400
    assert res.json() == "Invalid value for field(s): columnId"
    assert (await client.get("/tickets")).json() == []
