"""Progress timeline (append-only, newest first) and implementation details (ordered, soft-deletable)."""
import pytest

from catalog_admin.schemas.company import CompanyCreate
from catalog_admin.schemas.implementation import ImplementationDetailCreate, ImplementationDetailUpdate
from catalog_admin.schemas.progress import ProgressLogCreate
from catalog_admin.schemas.project import ProjectCreate
from catalog_admin.services import company_service, implementation_service, progress_service, project_service


async def _project_id(db) -> str:
    company = await company_service.create_company(db, CompanyCreate(name="Acme Dental"))
    project = await project_service.create_project(db, ProjectCreate(company_id=company.id, name="Chatbot"))
    return project.id


@pytest.mark.asyncio
async def test_timeline_newest_first(db) -> None:
    project_id = await _project_id(db)
    for phase in ("discovery", "design", "build"):
        await progress_service.log_progress(db, ProgressLogCreate(project_id=project_id, phase=phase, note=phase))
    blocked = await progress_service.log_progress(
        db, ProgressLogCreate(project_id=project_id, phase="test", status="blocked", logged_by="sam")
    )
    assert blocked.id.startswith("pg_")
    assert blocked.status == "blocked"

    timeline = await progress_service.get_timeline(db, project_id)
    assert [e.phase for e in timeline] == ["test", "build", "design", "discovery"]
    assert timeline[0].logged_by == "sam"
    assert timeline[-1].status == "in_progress"


@pytest.mark.asyncio
async def test_timeline_of_other_project_is_empty(db) -> None:
    project_id = await _project_id(db)
    await progress_service.log_progress(db, ProgressLogCreate(project_id=project_id, phase="deploy"))
    assert await progress_service.get_timeline(db, "pj_other0000000") == []


@pytest.mark.asyncio
async def test_details_sorted_filtered_updated_deleted(db) -> None:
    project_id = await _project_id(db)
    note = await implementation_service.create_detail(
        db, ImplementationDetailCreate(project_id=project_id, type="note", title="Kickoff notes", content="...", sort_order=2)
    )
    prompt = await implementation_service.create_detail(
        db,
        ImplementationDetailCreate(
            project_id=project_id,
            type="prompt",
            title="System prompt",
            content="You are a dental front desk assistant.",
            metadata_json={"model": "gpt-4o", "temperature": 0.2},
        ),
    )
    assert prompt.id.startswith("im_")
    assert prompt.sort_order == 0

    listed = await implementation_service.list_details(db, project_id)
    assert [d.id for d in listed] == [prompt.id, note.id]
    assert [d.id for d in await implementation_service.list_details(db, project_id, type="note")] == [note.id]

    updated = await implementation_service.update_detail(
        db, prompt.id, ImplementationDetailUpdate(content="You are a friendly assistant.", sort_order=5)
    )
    assert updated.title == "System prompt"
    assert updated.content == "You are a friendly assistant."
    assert updated.metadata_json == {"model": "gpt-4o", "temperature": 0.2}
    assert [d.id for d in await implementation_service.list_details(db, project_id)] == [note.id, prompt.id]

    assert await implementation_service.delete_detail(db, note.id) is True
    assert await implementation_service.get_detail(db, note.id) is None
    assert await implementation_service.update_detail(db, note.id, ImplementationDetailUpdate(title="x")) is None
    assert [d.id for d in await implementation_service.list_details(db, project_id)] == [prompt.id]
