"""
Project service: creation, partial update, linear status progression, direct status set,
tool assignment.
"""
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from catalog_admin.exceptions import ReferentialIntegrityError
from catalog_admin.schemas.company import CompanyCreate
from catalog_admin.schemas.project import ProjectCreate, ProjectToolCreate, ProjectUpdate
from catalog_admin.schemas.tool import ToolCreate
from catalog_admin.services import company_service, project_service, tool_service
from catalog_admin.services.project_service import FINAL_STATUS_REASON, next_status


async def _project(db, name="Chatbot rollout"):
    company = await company_service.create_company(db, CompanyCreate(name="Acme Dental"))
    return await project_service.create_project(
        db,
        ProjectCreate(company_id=company.id, name=name, target_date="2025-06-30"),
    )


def test_next_status_order() -> None:
    assert next_status("planning") == "in_progress"
    assert next_status("in_progress") == "review"
    assert next_status("review") == "completed"
    assert next_status("completed") is None
    assert next_status("on_hold") is None
    assert next_status("cancelled") is None


@pytest.mark.asyncio
async def test_new_project_starts_in_planning(db) -> None:
    project = await _project(db)
    assert project.id.startswith("pj_")
    assert project.status == "planning"
    assert project.company_name == "Acme Dental"
    assert project.target_date.isoformat() == "2025-06-30"
    assert project.completed_date is None


@pytest.mark.asyncio
async def test_unknown_company_is_referential_error(db) -> None:
    with pytest.raises(ReferentialIntegrityError):
        await project_service.create_project(db, ProjectCreate(company_id="co_ghost0000000", name="Orphan"))


@pytest.mark.asyncio
async def test_advance_walks_to_completed_then_stops(db) -> None:
    project = await _project(db)
    seen = []
    for _ in range(3):
        result = await project_service.advance_project(db, project.id)
        assert result.advanced is True
        seen.append(result.new_status)
        if result.new_status != "completed":
            assert result.project.completed_date is None
    assert seen == ["in_progress", "review", "completed"]
    assert result.project.completed_date == datetime.now(timezone.utc).date()

    before = await project_service.get_project(db, project.id)
    final = await project_service.advance_project(db, project.id)
    assert final.advanced is False
    assert final.reason == FINAL_STATUS_REASON
    assert final.project.status == "completed"
    after = await project_service.get_project(db, project.id)
    assert after.updated_at == before.updated_at


@pytest.mark.asyncio
async def test_on_hold_is_off_the_line(db) -> None:
    project = await _project(db)
    held = await project_service.set_project_status(db, project.id, "on_hold")
    assert held.status == "on_hold"

    result = await project_service.advance_project(db, project.id)
    assert result.advanced is False
    assert result.project.status == "on_hold"

    resumed = await project_service.set_project_status(db, project.id, "review")
    assert resumed.status == "review"
    assert resumed.completed_date is None


@pytest.mark.asyncio
async def test_set_status_rejects_unknown_value(db) -> None:
    project = await _project(db)
    with pytest.raises(ValidationError):
        await project_service.set_project_status(db, project.id, "shipped")
    assert (await project_service.get_project(db, project.id)).status == "planning"


@pytest.mark.asyncio
async def test_missing_project_returns_none(db) -> None:
    assert await project_service.advance_project(db, "pj_none00000000") is None
    assert await project_service.set_project_status(db, "pj_none00000000", "review") is None
    assert await project_service.get_project(db, "pj_none00000000") is None


@pytest.mark.asyncio
async def test_update_project_partial(db) -> None:
    project = await _project(db)
    updated = await project_service.update_project(
        db, project.id, ProjectUpdate(description="Phase one", target_date=None)
    )
    assert updated.name == "Chatbot rollout"
    assert updated.description == "Phase one"
    assert updated.target_date is None
    assert updated.company_id == project.company_id


@pytest.mark.asyncio
async def test_list_and_find_projects(db) -> None:
    first = await _project(db, name="Chatbot rollout")
    second = await project_service.create_project(
        db, ProjectCreate(company_id=first.company_id, name="Voice agent", description="Inbound calls")
    )
    await project_service.advance_project(db, second.id)

    assert [p.id for p in await project_service.list_projects(db)] == [first.id, second.id]
    assert [p.id for p in await project_service.list_projects(db, status="in_progress")] == [second.id]
    assert [p.id for p in await project_service.list_projects(db, search="INBOUND")] == [second.id]
    assert (await project_service.find_project(db, "Voice agent")).id == second.id

    await project_service.delete_project(db, first.id)
    assert [p.id for p in await project_service.list_projects(db, company_id=first.company_id)] == [second.id]


@pytest.mark.asyncio
async def test_assign_tools_keeps_duplicates_and_config(db) -> None:
    project = await _project(db)
    tool = await tool_service.create_tool(db, ToolCreate(name="OpenAI", category="ai_platform"))

    await project_service.assign_tool(
        db, project.id, ProjectToolCreate(tool_id=tool.id, config_json={"model": "gpt-4o"}, notes="main")
    )
    await project_service.assign_tool(db, project.id, ProjectToolCreate(tool_id=tool.id))

    tools = await project_service.list_project_tools(db, project.id)
    assert len(tools) == 2
    assert tools[0].tool_name == "OpenAI"
    assert tools[0].tool_category == "ai_platform"
    assert tools[0].config_json == {"model": "gpt-4o"}
    assert tools[1].notes is None

    with pytest.raises(ReferentialIntegrityError):
        await project_service.assign_tool(db, project.id, ProjectToolCreate(tool_id="tl_missing00000"))
