"""Form workflows: validation, staging, two-phase create and edit."""

from admin_loja.workflows.banner_workflow import BannerWorkflow
from admin_loja.workflows.base import FormWorkflow, WorkflowBusyError
from admin_loja.workflows.category_workflow import CategoryWorkflow
from admin_loja.workflows.forms import BannerForm, CategoryForm, LoginForm, ProductForm, validate_form
from admin_loja.workflows.product_workflow import ProductWorkflow, sanitize_filename
from admin_loja.workflows.promotion import PriceState, toggle_promotion
from admin_loja.workflows.results import WorkflowResult
from admin_loja.workflows.staging import (
    IncomingFile,
    StagedFile,
    StagingArea,
    StagingResult,
    remove_staged,
    stage_files,
)
from admin_loja.workflows.suggestion import DescriptionSuggester, NameTooShortError

__all__ = [
    "BannerWorkflow",
    "CategoryWorkflow",
    "FormWorkflow",
    "ProductWorkflow",
    "WorkflowBusyError",
    "WorkflowResult",
    "BannerForm",
    "CategoryForm",
    "LoginForm",
    "ProductForm",
    "validate_form",
    "sanitize_filename",
    "PriceState",
    "toggle_promotion",
    "IncomingFile",
    "StagedFile",
    "StagingArea",
    "StagingResult",
    "remove_staged",
    "stage_files",
    "DescriptionSuggester",
    "NameTooShortError",
]
