"""Input validation happens when request models are built, before any store access."""
import pytest
from pydantic import ValidationError

from catalog_admin.schemas.blueprint import BlueprintStepCreate
from catalog_admin.schemas.catalog import CatalogItemCreate
from catalog_admin.schemas.company import CompanyCreate, CompanyUpdate
from catalog_admin.schemas.implementation import ImplementationDetailUpdate
from catalog_admin.schemas.progress import ProgressLogCreate
from catalog_admin.schemas.project import ProjectCreate, ProjectUpdate
from catalog_admin.schemas.tool import ToolCreate


def test_empty_description_means_not_provided() -> None:
    item = CatalogItemCreate(name="  Healthcare ", description="   ")
    assert item.name == "Healthcare"
    assert item.description is None


def test_blank_name_rejected() -> None:
    with pytest.raises(ValidationError) as exc:
        CatalogItemCreate(name="   ")
    assert exc.value.errors()[0]["loc"] == ("name",)


def test_company_email_and_website_checked() -> None:
    with pytest.raises(ValidationError) as exc:
        CompanyCreate(name="Acme", contact_email="not-an-email")
    assert exc.value.errors()[0]["loc"] == ("contact_email",)

    with pytest.raises(ValidationError):
        CompanyCreate(name="Acme", website="acme dot com")

    ok = CompanyCreate(name="Acme", website="https://acmedental.io", contact_email="")
    assert ok.website == "https://acmedental.io"
    assert ok.contact_email is None


def test_company_update_tracks_only_given_fields() -> None:
    patch = CompanyUpdate(contact_phone="")
    assert patch.model_dump(exclude_unset=True) == {"contact_phone": None}
    with pytest.raises(ValidationError):
        CompanyUpdate(status="paused")


def test_tool_category_and_url() -> None:
    assert ToolCreate(name="Twilio", category="messaging", url="").url is None
    with pytest.raises(ValidationError):
        ToolCreate(name="Twilio", category="telecom")
    with pytest.raises(ValidationError):
        ToolCreate(name="Twilio", url="ftp//broken")


def test_project_dates_parse_and_company_is_fixed() -> None:
    p = ProjectCreate(company_id="co_abc", name="Chatbot", target_date="2025-03-31", start_date="")
    assert p.target_date.isoformat() == "2025-03-31"
    assert p.start_date is None
    with pytest.raises(ValidationError):
        ProjectCreate(company_id="co_abc", name="Chatbot", target_date="31/03/2025")
    with pytest.raises(ValidationError):
        ProjectUpdate(company_id="co_other")


def test_progress_phase_and_status_enums() -> None:
    entry = ProgressLogCreate(project_id="pj_x", phase="build")
    assert entry.status == "in_progress"
    with pytest.raises(ValidationError):
        ProgressLogCreate(project_id="pj_x", phase="shipping")


def test_step_order_starts_at_one() -> None:
    with pytest.raises(ValidationError):
        BlueprintStepCreate(blueprint_id="bp_x", step_order=0, title="Kickoff")


@pytest.mark.parametrize(
    "model, field",
    [
        (CompanyUpdate, "name"),
        (CompanyUpdate, "status"),
        (ProjectUpdate, "name"),
        (ImplementationDetailUpdate, "type"),
        (ImplementationDetailUpdate, "title"),
        (ImplementationDetailUpdate, "content"),
        (ImplementationDetailUpdate, "sort_order"),
    ],
)
def test_partial_update_cannot_null_a_required_field(model, field) -> None:
    assert model().model_dump(exclude_unset=True) == {}
    with pytest.raises(ValidationError) as exc:
        model(**{field: None})
    err = exc.value.errors()[0]
    assert err["loc"] == (field,)
    assert "cannot be null" in err["msg"]


def test_partial_update_may_clear_optional_fields() -> None:
    assert ProjectUpdate(description=None, target_date=None).model_dump(exclude_unset=True) == {
        "description": None,
        "target_date": None,
    }
    assert ImplementationDetailUpdate(metadata_json=None).model_dump(exclude_unset=True) == {"metadata_json": None}
    assert CompanyUpdate(website=None).model_dump(exclude_unset=True) == {"website": None}
