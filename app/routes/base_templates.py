"""Base template API routes"""
from fastapi import APIRouter, Depends

from ..config import settings
from ..dependencies import get_template_service
from ..identity import get_user_id
from ..models import (
    BaseTemplateListResponse,
    BaseWidgetDashboardTemplate,
    DashboardTemplateResponse,
    ListMeta,
)
from ..services.template_service import TemplateService

router = APIRouter(prefix=f"{settings.API_PREFIX}/base-templates", tags=["Base Templates"])


@router.get("", response_model=BaseTemplateListResponse, response_model_exclude_none=True)
async def list_base_templates(
    user_id: str = Depends(get_user_id),
    service: TemplateService = Depends(get_template_service)
):
    """List all base templates"""
    templates = service.list_base_templates()
    return BaseTemplateListResponse(data=templates, meta=ListMeta(count=len(templates)))


@router.get("/{base_name}", response_model=BaseWidgetDashboardTemplate, response_model_exclude_none=True)
async def get_base_template(
    base_name: str,
    user_id: str = Depends(get_user_id),
    service: TemplateService = Depends(get_template_service)
):
    """Get base template by name"""
    return service.get_base_template(base_name)


@router.get("/{base_name}/fork", response_model=DashboardTemplateResponse)
async def fork_base_template(
    base_name: str,
    user_id: str = Depends(get_user_id),
    service: TemplateService = Depends(get_template_service)
):
    """Create a personal template from a base template"""
    return DashboardTemplateResponse.from_entity(service.fork_base_template(base_name, user_id))
