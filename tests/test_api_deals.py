"""
HTTP tests for the deal and synergy routes.
"""

import pytest


@pytest.fixture
async def deal_graph(test_client):
    company = (await test_client.post("/api/v1/companies", json={"name": "Acme"})).json()
    deal = (await test_client.post("/api/v1/deals", json={"name": "Rollout", "company_id": company["id"], "value": "1500.00"})).json()
    contacts = []
    for first_name in ("Ada", "Alan", "Grace"):
        response = await test_client.post("/api/v1/contacts", json={"first_name": first_name, "last_name": "Doe"})
        contacts.append(response.json())
    return company, deal, contacts


@pytest.mark.asyncio
async def test_replace_deal_synergies_route(test_client, deal_graph):
    company, deal, (ada, alan, grace) = deal_graph
    url = f"/api/v1/deals/{deal['id']}/synergies"

    first = await test_client.post(url, json={"contact_ids": [ada["id"], alan["id"]]})
    assert first.status_code == 200
    assert [s["contact_id"] for s in first.json()] == [ada["id"], alan["id"]]
    assert all(s["company_id"] == company["id"] for s in first.json())

    again = await test_client.post(url, json={"contact_ids": [ada["id"], alan["id"]]})
    assert [s["id"] for s in again.json()] == [s["id"] for s in first.json()]

    swapped = await test_client.post(url, json={"contact_ids": [grace["id"]]})
    assert [s["contact_id"] for s in swapped.json()] == [grace["id"]]
    assert [s["contact_id"] for s in (await test_client.get(url)).json()] == [grace["id"]]

    by_contact = (await test_client.get(f"/api/v1/contacts/{grace['id']}/synergies")).json()
    assert [s["deal_id"] for s in by_contact] == [deal["id"]]
    by_company = (await test_client.get(f"/api/v1/companies/{company['id']}/synergies")).json()
    assert len(by_company) == 1


@pytest.mark.asyncio
async def test_replace_deal_synergies_unknown_contact(test_client, deal_graph):
    _, deal, (ada, _, _) = deal_graph

    response = await test_client.post(
        f"/api/v1/deals/{deal['id']}/synergies",
        json={"contact_ids": [ada["id"], 999]},
    )

    assert response.status_code == 422
    assert response.json()["error"]["details"]["missing_contact_ids"] == [999]


@pytest.mark.asyncio
async def test_synergy_routes(test_client, deal_graph):
    company, deal, (ada, _, _) = deal_graph

    response = await test_client.post(
        "/api/v1/synergies",
        json={"contact_id": ada["id"], "company_id": company["id"], "deal_id": deal["id"], "start_date": "2024-01-15"},
    )
    assert response.status_code == 201
    synergy = response.json()
    assert synergy["type"] == "business"
    assert synergy["start_date"] == "2024-01-15"

    response = await test_client.patch(f"/api/v1/synergies/{synergy['id']}", json={"end_date": "2024-06-30"})
    assert response.json()["end_date"] == "2024-06-30"

    response = await test_client.patch(f"/api/v1/synergies/{synergy['id']}", json={"end_date": "2023-12-31"})
    assert response.status_code == 422

    assert (await test_client.delete(f"/api/v1/synergies/{synergy['id']}")).status_code == 204
    assert (await test_client.get(f"/api/v1/synergies/{synergy['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_synergy_body_validation(test_client, deal_graph):
    company, deal, (ada, _, _) = deal_graph

    response = await test_client.post(
        "/api/v1/synergies",
        json={
            "contact_id": ada["id"],
            "company_id": company["id"],
            "deal_id": deal["id"],
            "start_date": "2024-05-01",
            "end_date": "2024-04-01",
        },
    )
    assert response.status_code == 422

    response = await test_client.post(
        "/api/v1/synergies",
        json={"contact_id": ada["id"], "company_id": company["id"]},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_delete_deal_route(test_client, deal_graph):
    _, deal, (ada, _, _) = deal_graph
    await test_client.post(f"/api/v1/deals/{deal['id']}/synergies", json={"contact_ids": [ada["id"]]})

    response = await test_client.delete(f"/api/v1/deals/{deal['id']}")

    assert response.status_code == 200
    assert response.json()["synergies_removed"] == 1
    assert (await test_client.get(f"/api/v1/deals/{deal['id']}")).status_code == 404
    assert (await test_client.get(f"/api/v1/contacts/{ada['id']}/synergies")).json() == []


@pytest.mark.asyncio
async def test_list_synergies_route(test_client, deal_graph):
    company, deal, contacts = deal_graph
    contact_ids = [contact["id"] for contact in contacts]
    response = await test_client.post(f"/api/v1/deals/{deal['id']}/synergies", json={"contact_ids": contact_ids})
    assert response.status_code == 200

    response = await test_client.get("/api/v1/synergies")
    assert response.status_code == 200
    assert sorted(synergy["contact_id"] for synergy in response.json()) == sorted(contact_ids)

    response = await test_client.get("/api/v1/synergies", params={"skip": 1, "limit": 1})
    assert len(response.json()) == 1


@pytest.mark.asyncio
async def test_synergy_null_label_is_422(test_client, deal_graph):
    company, deal, contacts = deal_graph
    response = await test_client.post(
        "/api/v1/synergies",
        json={"contact_id": contacts[0]["id"], "company_id": company["id"], "deal_id": deal["id"]},
    )
    synergy = response.json()

    response = await test_client.patch(f"/api/v1/synergies/{synergy['id']}", json={"type": None})
    assert response.status_code == 422
    assert (await test_client.get(f"/api/v1/synergies/{synergy['id']}")).json()["type"] == "business"
