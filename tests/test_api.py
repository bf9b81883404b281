"""
HTTP API over an in-process app (httpx ASGITransport):
201 on create, 409 on duplicate / dangling reference, 422 on invalid input, 404 on missing rows,
correlation id echoed back.
"""
import pytest


@pytest.mark.asyncio
async def test_health_endpoints(client) -> None:
    r = await client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}

    r = await client.get("/api/readyz")
    assert r.status_code == 200
    assert r.json()["store"] == "sqlite"


@pytest.mark.asyncio
async def test_correlation_id_round_trip(client) -> None:
    r = await client.get("/api/healthz", headers={"X-Correlation-ID": "req-123"})
    assert r.headers["X-Correlation-ID"] == "req-123"
    r = await client.get("/api/healthz")
    assert r.headers["X-Correlation-ID"]


@pytest.mark.asyncio
async def test_industry_create_duplicate_and_lookup(client) -> None:
    r = await client.post("/api/industries", json={"name": "Healthcare", "description": ""})
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["id"].startswith("in_")
    assert body["description"] is None

    r = await client.post("/api/industries", json={"name": "Healthcare"})
    assert r.status_code == 409
    assert r.json() == {"detail": "An industry with that name already exists"}

    r = await client.get("/api/industries/Healthcare")
    assert r.status_code == 200
    assert r.json()["id"] == body["id"]

    r = await client.get("/api/industries/Unknown")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_validation_errors_are_422(client) -> None:
    r = await client.post("/api/companies", json={"name": "Acme", "contact_email": "nope"})
    assert r.status_code == 422
    r = await client.post("/api/tools", json={"name": "X", "category": "telecom"})
    assert r.status_code == 422
    r = await client.get("/api/companies", params={"status": "paused"})
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_industry_delete_with_niches_is_conflict(client) -> None:
    industry = (await client.post("/api/industries", json={"name": "Healthcare"})).json()
    r = await client.post("/api/niches", json={"name": "Dental", "industry_id": industry["id"]})
    assert r.status_code == 201
    assert r.json()["industry_name"] == "Healthcare"

    r = await client.delete(f"/api/industries/{industry['id']}")
    assert r.status_code == 409
    r = await client.delete("/api/industries/in_nothere000000")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_company_links_add_and_replace(client) -> None:
    company = (await client.post("/api/companies", json={"name": "Acme Dental"})).json()
    p1 = (await client.post("/api/products", json={"name": "Chatbot"})).json()
    p2 = (await client.post("/api/products", json={"name": "Voice agent"})).json()

    r = await client.post(f"/api/companies/{company['id']}/products", json={"ref_id": p1["id"], "notes": "pilot"})
    assert r.status_code == 201
    assert r.json()["ref_id"] == p1["id"]

    r = await client.put(f"/api/companies/{company['id']}/products", json={"ids": [p2["id"]]})
    assert r.status_code == 200
    assert [a["ref_id"] for a in r.json()] == [p2["id"]]

    r = await client.put(f"/api/companies/{company['id']}/products", json={"ids": [p1["id"], "pd_bogus0000000"]})
    assert r.status_code == 409

    detail = (await client.get("/api/companies/Acme Dental")).json()
    assert [p["name"] for p in detail["products"]] == ["Voice agent"]

    r = await client.post(f"/api/companies/{company['id']}/products", json={"ref_id": "pd_bogus0000000"})
    assert r.status_code == 409
    r = await client.put("/api/companies/co_missing000000/products", json={"ids": []})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_company_patch_rejects_unknown_fields(client) -> None:
    company = (await client.post("/api/companies", json={"name": "Acme Dental"})).json()
    r = await client.patch(f"/api/companies/{company['id']}", json={"status": "archived"})
    assert r.status_code == 200
    assert r.json()["status"] == "archived"
    r = await client.patch(f"/api/companies/{company['id']}", json={"owner": "x"})
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_project_lifecycle(client) -> None:
    company = (await client.post("/api/companies", json={"name": "Acme Dental"})).json()
    r = await client.post("/api/projects", json={"company_id": company["id"], "name": "Chatbot"})
    assert r.status_code == 201
    project = r.json()
    assert project["status"] == "planning"

    for expected in ("in_progress", "review", "completed"):
        r = await client.post(f"/api/projects/{project['id']}/advance")
        assert r.status_code == 200
        assert r.json()["new_status"] == expected
    r = await client.post(f"/api/projects/{project['id']}/advance")
    assert r.json()["advanced"] is False
    assert r.json()["reason"] == "Already at final status"

    r = await client.put(f"/api/projects/{project['id']}/status", json={"status": "bogus"})
    assert r.status_code == 422
    r = await client.put(f"/api/projects/{project['id']}/status", json={"status": "on_hold"})
    assert r.json()["status"] == "on_hold"

    r = await client.patch(f"/api/projects/{project['id']}", json={"company_id": "co_other"})
    assert r.status_code == 422

    r = await client.post(f"/api/projects/{project['id']}/progress", json={"phase": "build", "note": "API wired"})
    assert r.status_code == 201
    r = await client.get(f"/api/projects/{project['id']}/progress")
    assert [e["note"] for e in r.json()] == ["API wired"]

    r = await client.post(
        f"/api/projects/{project['id']}/details",
        json={"type": "prompt", "title": "System prompt", "content": "Be brief."},
    )
    assert r.status_code == 201
    detail_id = r.json()["id"]
    r = await client.patch(f"/api/details/{detail_id}", json={"title": "Main prompt"})
    assert r.json()["title"] == "Main prompt"
    r = await client.delete(f"/api/details/{detail_id}")
    assert r.json() == {"id": detail_id, "deleted": True}
    r = await client.get(f"/api/details/{detail_id}")
    assert r.status_code == 404

    r = await client.post("/api/projects/pj_missing000000/advance")
    assert r.status_code == 404
    r = await client.post("/api/projects", json={"company_id": "co_missing000000", "name": "Orphan"})
    assert r.status_code == 409


@pytest.mark.asyncio
async def test_blueprint_apply_over_http(client) -> None:
    await client.post("/api/companies", json={"name": "Acme Dental"})
    tool = (await client.post("/api/tools", json={"name": "OpenAI", "category": "ai_platform"})).json()
    r = await client.post("/api/blueprints", json={"name": "Dental Chatbot", "description": "FAQ bot"})
    assert r.status_code == 201

    r = await client.post("/api/blueprints/Dental Chatbot/steps", json={"step_order": 1, "title": "Discovery"})
    assert r.status_code == 201
    r = await client.post(
        "/api/blueprints/Dental Chatbot/tools",
        json={"tool_id": tool["id"], "role_in_blueprint": "LLM", "notes": "gpt-4o"},
    )
    assert r.status_code == 201
    assert r.json()["tool_name"] == "OpenAI"

    r = await client.post("/api/blueprints/Dental Chatbot/apply", json={"company": "Acme Dental"})
    assert r.status_code == 201, r.text
    project = r.json()["project"]
    assert project["name"] == "Dental Chatbot (from blueprint)"

    tools = (await client.get(f"/api/projects/{project['id']}/tools")).json()
    assert [(t["tool_name"], t["notes"]) for t in tools] == [("OpenAI", "gpt-4o")]

    r = await client.post("/api/blueprints/Dental Chatbot/apply", json={"company": "Nobody"})
    assert r.status_code == 404
    r = await client.post("/api/blueprints/Missing/apply", json={"company": "Acme Dental"})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_dashboard_endpoints(client) -> None:
    company = (await client.post("/api/companies", json={"name": "Acme Dental"})).json()
    await client.post("/api/projects", json={"company_id": company["id"], "name": "Chatbot"})

    r = await client.get("/api/dashboard")
    assert r.status_code == 200
    assert r.json()["counts"]["projects"] == 1

    r = await client.get("/api/analytics")
    assert r.status_code == 200
    assert r.json()["by_industry"] == []

    r = await client.get("/api/kanban")
    assert [c["name"] for c in r.json()["columns"]["planning"]] == ["Chatbot"]


@pytest.mark.asyncio
async def test_patch_with_null_required_field_is_422(client) -> None:
    company = (await client.post("/api/companies", json={"name": "Acme Dental"})).json()
    r = await client.patch(f"/api/companies/{company['id']}", json={"status": None})
    assert r.status_code == 422
    assert r.json()["detail"][0]["loc"][-1] == "status"
    r = await client.patch(f"/api/companies/{company['id']}", json={"name": None})
    assert r.status_code == 422

    project = (await client.post("/api/projects", json={"company_id": company["id"], "name": "Chatbot"})).json()
    r = await client.patch(f"/api/projects/{project['id']}", json={"name": None})
    assert r.status_code == 422

    r = await client.post(
        f"/api/projects/{project['id']}/details",
        json={"type": "prompt", "title": "System prompt", "content": "Be brief."},
    )
    assert r.status_code == 201
    detail_id = r.json()["id"]
    r = await client.patch(f"/api/details/{detail_id}", json={"title": None})
    assert r.status_code == 422

    r = await client.get(f"/api/companies/{company['id']}")
    assert r.json()["name"] == "Acme Dental"
    assert r.json()["status"] == "active"
