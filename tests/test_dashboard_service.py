"""Dashboard aggregates: live counts, status distribution, recent logs, analytics, kanban columns."""
import pytest

from catalog_admin.schemas.blueprint import BlueprintCreate
from catalog_admin.schemas.catalog import CatalogItemCreate
from catalog_admin.schemas.company import CompanyCreate
from catalog_admin.schemas.progress import ProgressLogCreate
from catalog_admin.schemas.project import ProjectCreate, ProjectToolCreate
from catalog_admin.schemas.tool import ToolCreate
from catalog_admin.services import (
    blueprint_service,
    catalog_service,
    company_service,
    dashboard_service,
    progress_service,
    project_service,
    tool_service,
)


async def _seed(db):
    health = await catalog_service.create_industry(db, CatalogItemCreate(name="Healthcare"))
    acme = await company_service.create_company(db, CompanyCreate(name="Acme Dental"))
    gone = await company_service.create_company(db, CompanyCreate(name="Gone Ltd"))
    await company_service.delete_company(db, gone.id)
    await company_service.assign_industry(db, acme.id, health.id)

    openai = await tool_service.create_tool(db, ToolCreate(name="OpenAI"))
    await tool_service.create_tool(db, ToolCreate(name="Twilio"))
    await blueprint_service.create_blueprint(db, BlueprintCreate(name="Dental Chatbot"))

    done = await project_service.create_project(db, ProjectCreate(company_id=acme.id, name="Chatbot"))
    for _ in range(3):
        await project_service.advance_project(db, done.id)
    active = await project_service.create_project(db, ProjectCreate(company_id=acme.id, name="Voice agent"))
    held = await project_service.create_project(db, ProjectCreate(company_id=acme.id, name="CRM sync"))
    await project_service.set_project_status(db, held.id, "on_hold")

    await project_service.assign_tool(db, done.id, ProjectToolCreate(tool_id=openai.id))
    await project_service.assign_tool(db, active.id, ProjectToolCreate(tool_id=openai.id))
    for i in range(7):
        await progress_service.log_progress(
            db, ProgressLogCreate(project_id=active.id, phase="build", note=f"entry {i}")
        )
    return done, active, held


@pytest.mark.asyncio
async def test_dashboard_summary(db) -> None:
    await _seed(db)
    summary = await dashboard_service.dashboard_summary(db)

    assert summary.counts.companies == 1
    assert summary.counts.projects == 3
    assert summary.counts.tools == 2
    assert summary.counts.blueprints == 1
    assert {s.status: s.count for s in summary.status_distribution} == {
        "completed": 1,
        "planning": 1,
        "on_hold": 1,
    }
    assert [log.note for log in summary.recent_logs] == [f"entry {i}" for i in (6, 5, 4, 3, 2)]
    assert summary.recent_logs[0].project_name == "Voice agent"


@pytest.mark.asyncio
async def test_analytics(db) -> None:
    await _seed(db)
    stats = await dashboard_service.analytics(db)

    assert [(s.industry, s.total, s.completed) for s in stats.by_industry] == [("Healthcare", 3, 1)]
    assert [(t.name, t.count) for t in stats.tool_usage] == [("OpenAI", 2), ("Twilio", 0)]
    assert sum(s.count for s in stats.projects_by_status) == 3


@pytest.mark.asyncio
async def test_kanban_has_four_linear_columns(db) -> None:
    done, active, held = await _seed(db)
    board = await dashboard_service.projects_by_status(db)

    assert list(board.columns) == ["planning", "in_progress", "review", "completed"]
    assert [c.id for c in board.columns["completed"]] == [done.id]
    assert [c.id for c in board.columns["planning"]] == [active.id]
    assert board.columns["review"] == []
    assert all(c.id != held.id for cards in board.columns.values() for c in cards)
    assert board.columns["completed"][0].company_name == "Acme Dental"
