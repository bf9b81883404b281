"""SQLAlchemy models for the client catalog."""
from catalog_admin.models.industry import Industry, Niche
from catalog_admin.models.offering import Product, Service
from catalog_admin.models.company import (
    Company,
    CompanyIndustry,
    CompanyNiche,
    CompanyProduct,
    CompanyService,
)
from catalog_admin.models.tool import Tool
from catalog_admin.models.project import Project, ProjectTool
from catalog_admin.models.implementation_detail import ImplementationDetail
from catalog_admin.models.progress_log import ProgressLog
from catalog_admin.models.blueprint import (
    Blueprint,
    BlueprintIndustry,
    BlueprintNiche,
    BlueprintStep,
    BlueprintTool,
)

__all__ = [
    "Industry",
    "Niche",
    "Product",
    "Service",
    "Company",
    "CompanyIndustry",
    "CompanyNiche",
    "CompanyProduct",
    "CompanyService",
    "Tool",
    "Project",
    "ProjectTool",
    "ImplementationDetail",
    "ProgressLog",
    "Blueprint",
    "BlueprintStep",
    "BlueprintTool",
    "BlueprintIndustry",
    "BlueprintNiche",
]
