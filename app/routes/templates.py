"""Dashboard template API routes"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status

from ..config import settings
from ..dependencies import get_template_service
from ..identity import get_user_id
from ..models import (
    DashboardTemplateListResponse,
    DashboardTemplateResponse,
    DashboardTemplateUpdate,
)
from ..services.template_service import TemplateService

logger = logging.getLogger(__name__)

router = APIRouter(prefix=settings.API_PREFIX, tags=["Dashboard Templates"])


@router.get("", response_model=DashboardTemplateListResponse, response_model_exclude_none=True)
@router.get(
    "/", response_model=DashboardTemplateListResponse, response_model_exclude_none=True, include_in_schema=False
)
async def list_templates(
    response: Response,
    dashboard_type: Optional[str] = Query(None, alias="dashboardType"),
    user_id: str = Depends(get_user_id),
    service: TemplateService = Depends(get_template_service)
):
    """
    List the caller's templates.

    A 404 with a non-empty ``data`` array means no template of the requested
    dashboard type existed and a default one was just created.
    """
    result = service.list_templates(user_id, dashboard_type)
    if result.provisioned:
        response.status_code = status.HTTP_404_NOT_FOUND
    return DashboardTemplateListResponse.from_entities(result.templates)


@router.get("/{template_id}", response_model=DashboardTemplateResponse, response_model_exclude_none=True)
async def get_template(
    template_id: int,
    user_id: str = Depends(get_user_id),
    service: TemplateService = Depends(get_template_service)
):
    """Get template by ID"""
    return DashboardTemplateResponse.from_entity(service.get_template(template_id, user_id))


@router.patch("/{template_id}", response_model=DashboardTemplateResponse, response_model_exclude_none=True)
async def update_template(
    template_id: int,
    update_data: DashboardTemplateUpdate,
    user_id: str = Depends(get_user_id),
    service: TemplateService = Depends(get_template_service)
):
    """Replace the layout of a template"""
    template = service.update_template(template_id, update_data.template_config, user_id)
    return DashboardTemplateResponse.from_entity(template)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(
    template_id: int,
    user_id: str = Depends(get_user_id),
    service: TemplateService = Depends(get_template_service)
):
    """Delete template permanently"""
    service.delete_template(template_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{template_id}/copy", response_model=DashboardTemplateResponse, response_model_exclude_none=True)
async def copy_template(
    template_id: int,
    user_id: str = Depends(get_user_id),
    service: TemplateService = Depends(get_template_service)
):
    """Copy any template into a new one owned by the caller"""
    return DashboardTemplateResponse.from_entity(service.copy_template(template_id, user_id))


@router.post("/{template_id}/default", response_model=DashboardTemplateResponse, response_model_exclude_none=True)
async def set_default_template(
    template_id: int,
    user_id: str = Depends(get_user_id),
    service: TemplateService = Depends(get_template_service)
):
    """Make a template the caller's default for its base"""
    return DashboardTemplateResponse.from_entity(service.set_default_template(template_id, user_id))


@router.post("/{template_id}/reset", response_model=DashboardTemplateResponse, response_model_exclude_none=True)
async def reset_template(
    template_id: int,
    user_id: str = Depends(get_user_id),
    service: TemplateService = Depends(get_template_service)
):
    """Restore a template's layout from its base template"""
    return DashboardTemplateResponse.from_entity(service.reset_template(template_id, user_id))
