"""
End-to-end walk through the services, each step in its own unit of work like a CLI run:
industry -> niche -> company -> link -> project -> progress -> advance -> blueprint -> apply.
"""
import pytest

from catalog_admin.schemas.blueprint import BlueprintCreate, BlueprintStepCreate, BlueprintToolCreate
from catalog_admin.schemas.catalog import CatalogItemCreate, NicheCreate
from catalog_admin.schemas.company import CompanyCreate
from catalog_admin.schemas.progress import ProgressLogCreate
from catalog_admin.schemas.project import ProjectCreate
from catalog_admin.schemas.tool import ToolCreate
from catalog_admin.services import (
    blueprint_service,
    catalog_service,
    company_service,
    progress_service,
    project_service,
    tool_service,
)


@pytest.mark.asyncio
async def test_catalog_to_applied_blueprint(store) -> None:
    async with store.unit_of_work() as db:
        industry = await catalog_service.create_industry(db, CatalogItemCreate(name="Healthcare"))
    async with store.unit_of_work() as db:
        niche = await catalog_service.create_niche(db, NicheCreate(name="Dental Clinics", industry_id=industry.id))
    async with store.unit_of_work() as db:
        company = await company_service.create_company(db, CompanyCreate(name="Acme Dental"))
    async with store.unit_of_work() as db:
        await company_service.assign_niche(db, company.id, niche.id)
    async with store.unit_of_work() as db:
        support_bot = await project_service.create_project(
            db, ProjectCreate(company_id=company.id, name="Support Bot")
        )
    assert support_bot.status == "planning"

    async with store.unit_of_work() as db:
        await progress_service.log_progress(db, ProgressLogCreate(project_id=support_bot.id, phase="discovery"))
    async with store.unit_of_work() as db:
        advanced = await project_service.advance_project(db, support_bot.id)
    assert advanced.new_status == "in_progress"

    async with store.unit_of_work() as db:
        twilio = await tool_service.create_tool(db, ToolCreate(name="Twilio", category="messaging"))
        bp = await blueprint_service.create_blueprint(db, BlueprintCreate(name="Dental Starter"))
        await blueprint_service.add_step(db, BlueprintStepCreate(blueprint_id=bp.id, step_order=1, title="Kickoff"))
        await blueprint_service.add_tool(db, BlueprintToolCreate(blueprint_id=bp.id, tool_id=twilio.id))

    async with store.unit_of_work() as db:
        applied = await blueprint_service.apply_blueprint(db, "Dental Starter", "Acme Dental")
    assert applied.project.name == "Dental Starter (from blueprint)"

    async with store.unit_of_work() as db:
        projects = await project_service.list_projects(db, company_id=company.id)
        assert [p.name for p in projects] == ["Support Bot", "Dental Starter (from blueprint)"]
        new_tools = await project_service.list_project_tools(db, applied.project.id)
        assert [t.tool_name for t in new_tools] == ["Twilio"]

        original = await project_service.get_project(db, support_bot.id)
        assert original.status == "in_progress"
        assert await project_service.list_project_tools(db, support_bot.id) == []
        timeline = await progress_service.get_timeline(db, support_bot.id)
        assert [e.phase for e in timeline] == ["discovery"]

        detail = await company_service.get_company(db, "Acme Dental")
        assert [n.name for n in detail.niches] == ["Dental Clinics"]
        assert detail.niches[0].industry_name == "Healthcare"
