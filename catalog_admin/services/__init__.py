"""Business logic services. Each function takes an AsyncSession first and never commits."""
from catalog_admin.services.blueprint_service import apply_blueprint
from catalog_admin.services.company_service import replace_assignments
from catalog_admin.services.project_service import advance_project

__all__ = [
    "apply_blueprint",
    "replace_assignments",
    "advance_project",
]
