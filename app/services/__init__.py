"""
Business logic
"""
from .catalogs import CatalogProvider, BaseTemplateRegistry, WidgetMappingRegistry
from .template_service import TemplateService, TemplateListResult

__all__ = [
    'CatalogProvider', 'BaseTemplateRegistry', 'WidgetMappingRegistry',
    'TemplateService', 'TemplateListResult',
]
