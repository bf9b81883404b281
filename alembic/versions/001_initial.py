"""initial: catalog, companies, tools, projects, blueprints

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSONB = postgresql.JSONB(astext_type=sa.Text())


def _id() -> sa.Column:
    return sa.Column("id", sa.String(32), nullable=False)


def _ts(name: str, nullable: bool = True) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=nullable)


def _deleted_at() -> sa.Column:
    return sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True)


def _catalog_table(name: str) -> None:
    op.create_table(
        name,
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        _ts("created_at"),
        _deleted_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name=f"uq_{name}_name"),
    )


def _link_table(name: str, owner: str, target: str, target_table: str, with_notes: bool = False) -> None:
    columns = [
        _id(),
        sa.Column(owner, sa.String(32), nullable=False),
        sa.Column(target, sa.String(32), nullable=False),
    ]
    if with_notes:
        columns.append(sa.Column("notes", sa.Text(), nullable=True))
    owner_table = "companies" if owner == "company_id" else "blueprints"
    op.create_table(
        name,
        *columns,
        _ts("created_at"),
        sa.ForeignKeyConstraint([owner], [f"{owner_table}.id"]),
        sa.ForeignKeyConstraint([target], [f"{target_table}.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(f"ix_{name}_{owner}", name, [owner])


def upgrade() -> None:
    _catalog_table("industries")
    _catalog_table("products")
    _catalog_table("services")
    op.create_table(
        "niches",
        _id(),
        sa.Column("industry_id", sa.String(32), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        _ts("created_at"),
        _deleted_at(),
        sa.ForeignKeyConstraint(["industry_id"], ["industries.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("industry_id", "name", name="uq_niches_industry_name"),
    )

    op.create_table(
        "companies",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("contact_name", sa.String(255), nullable=True),
        sa.Column("contact_email", sa.String(320), nullable=True),
        sa.Column("contact_phone", sa.String(64), nullable=True),
        sa.Column("website", sa.String(2048), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("status", sa.String(32), server_default="active", nullable=False),
        _ts("created_at"),
        _ts("updated_at"),
        _deleted_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_companies_name"),
    )
    op.create_table(
        "tools",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("category", sa.String(32), nullable=True),
        sa.Column("url", sa.String(2048), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        _ts("created_at"),
        _deleted_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_tools_name"),
    )
    op.create_table(
        "blueprints",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        _ts("created_at"),
        _ts("updated_at"),
        _deleted_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_blueprints_name"),
    )

    _link_table("company_industries", "company_id", "industry_id", "industries")
    _link_table("company_niches", "company_id", "niche_id", "niches")
    _link_table("company_products", "company_id", "product_id", "products", with_notes=True)
    _link_table("company_services", "company_id", "service_id", "services", with_notes=True)
    _link_table("blueprint_industries", "blueprint_id", "industry_id", "industries")
    _link_table("blueprint_niches", "blueprint_id", "niche_id", "niches")

    op.create_table(
        "projects",
        _id(),
        sa.Column("company_id", sa.String(32), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(32), server_default="planning", nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("target_date", sa.Date(), nullable=True),
        sa.Column("completed_date", sa.Date(), nullable=True),
        _ts("created_at"),
        _ts("updated_at"),
        _deleted_at(),
        sa.ForeignKeyConstraint(["company_id"], ["companies.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_projects_company_id", "projects", ["company_id"])
    op.create_index("ix_projects_status", "projects", ["status"])

    op.create_table(
        "project_tools",
        _id(),
        sa.Column("project_id", sa.String(32), nullable=False),
        sa.Column("tool_id", sa.String(32), nullable=False),
        sa.Column("config_json", JSONB, nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        _ts("created_at"),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
        sa.ForeignKeyConstraint(["tool_id"], ["tools.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_project_tools_project_id", "project_tools", ["project_id"])

    op.create_table(
        "implementation_details",
        _id(),
        sa.Column("project_id", sa.String(32), nullable=False),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("title", sa.String(512), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("metadata_json", JSONB, nullable=True),
        sa.Column("sort_order", sa.Integer(), server_default="0", nullable=False),
        _ts("created_at"),
        _ts("updated_at"),
        _deleted_at(),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_implementation_details_project_id", "implementation_details", ["project_id"])

    op.create_table(
        "progress_logs",
        _id(),
        sa.Column("project_id", sa.String(32), nullable=False),
        sa.Column("phase", sa.String(32), nullable=False),
        sa.Column("status", sa.String(32), server_default="in_progress", nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("logged_by", sa.String(255), nullable=True),
        _ts("logged_at"),
        _ts("created_at"),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_progress_logs_project_logged_at", "progress_logs", ["project_id", "logged_at"])

    op.create_table(
        "blueprint_steps",
        _id(),
        sa.Column("blueprint_id", sa.String(32), nullable=False),
        sa.Column("step_order", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(512), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        _ts("created_at"),
        _ts("updated_at"),
        sa.ForeignKeyConstraint(["blueprint_id"], ["blueprints.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "blueprint_tools",
        _id(),
        sa.Column("blueprint_id", sa.String(32), nullable=False),
        sa.Column("tool_id", sa.String(32), nullable=False),
        sa.Column("role_in_blueprint", sa.String(255), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        _ts("created_at"),
        sa.ForeignKeyConstraint(["blueprint_id"], ["blueprints.id"]),
        sa.ForeignKeyConstraint(["tool_id"], ["tools.id"]),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("blueprint_tools")
    op.drop_table("blueprint_steps")
    op.drop_index("ix_progress_logs_project_logged_at", table_name="progress_logs")
    op.drop_table("progress_logs")
    op.drop_index("ix_implementation_details_project_id", table_name="implementation_details")
    op.drop_table("implementation_details")
    op.drop_index("ix_project_tools_project_id", table_name="project_tools")
    op.drop_table("project_tools")
    op.drop_index("ix_projects_status", table_name="projects")
    op.drop_index("ix_projects_company_id", table_name="projects")
    op.drop_table("projects")
    for name, owner in (
        ("blueprint_niches", "blueprint_id"),
        ("blueprint_industries", "blueprint_id"),
        ("company_services", "company_id"),
        ("company_products", "company_id"),
        ("company_niches", "company_id"),
        ("company_industries", "company_id"),
    ):
        op.drop_index(f"ix_{name}_{owner}", table_name=name)
        op.drop_table(name)
    op.drop_table("blueprints")
    op.drop_table("tools")
    op.drop_table("companies")
    op.drop_table("niches")
    op.drop_table("services")
    op.drop_table("products")
    op.drop_table("industries")
