"""Widget mapping API routes"""
from fastapi import APIRouter, Depends

from ..config import settings
from ..dependencies import get_template_service
from ..identity import get_user_id
from ..models import WidgetMappingResponse
from ..services.template_service import TemplateService

router = APIRouter(prefix=settings.API_PREFIX, tags=["Widget Mapping"])


@router.get("/widget-mapping", response_model=WidgetMappingResponse, response_model_exclude_none=True)
async def get_widget_mapping(
    user_id: str = Depends(get_user_id),
    service: TemplateService = Depends(get_template_service)
):
    """All widget mappings keyed by composite widget key"""
    return WidgetMappingResponse(data=service.get_widget_mappings())
