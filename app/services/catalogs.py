"""Base template and widget mapping catalogs"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional
from pydantic import TypeAdapter, ValidationError

from ..errors import CatalogLoadError
from ..models import BaseWidgetDashboardTemplate, WidgetModuleFederationMetadata

logger = logging.getLogger(__name__)

_BASE_TEMPLATES_ADAPTER = TypeAdapter(List[BaseWidgetDashboardTemplate])
_WIDGET_MAPPINGS_ADAPTER = TypeAdapter(List[WidgetModuleFederationMetadata])


class BaseTemplateRegistry:
    """Base templates keyed by name"""

    def __init__(self, templates: Optional[Iterable[BaseWidgetDashboardTemplate]] = None):
        self._templates: Dict[str, BaseWidgetDashboardTemplate] = {}
        for template in templates or []:
            self.add(template)

    def add(self, template: BaseWidgetDashboardTemplate) -> None:
        self._templates[template.name] = template

    def get(self, name: str) -> Optional[BaseWidgetDashboardTemplate]:
        return self._templates.get(name)

    def all(self) -> Dict[str, BaseWidgetDashboardTemplate]:
        return dict(self._templates)

    def __len__(self) -> int:
        return len(self._templates)


class WidgetMappingRegistry:
    """Widget module metadata keyed by composite widget key"""

    def __init__(self, mappings: Optional[Iterable[WidgetModuleFederationMetadata]] = None):
        self._mappings: Dict[str, WidgetModuleFederationMetadata] = {}
        for mapping in mappings or []:
            self.add(mapping)

    def add(self, mapping: WidgetModuleFederationMetadata) -> None:
        # same key overwrites
        self._mappings[mapping.widget_key()] = mapping

    def get(self, key: str) -> Optional[WidgetModuleFederationMetadata]:
        return self._mappings.get(key)

    def all(self) -> Dict[str, WidgetModuleFederationMetadata]:
        return dict(self._mappings)

    def __len__(self) -> int:
        return len(self._mappings)


@dataclass
class CatalogProvider:
    """Read-only catalogs consumed by the template service"""
    base_templates: BaseTemplateRegistry = field(default_factory=BaseTemplateRegistry)
    widget_mappings: WidgetMappingRegistry = field(default_factory=WidgetMappingRegistry)


def load_base_templates(config_string: str) -> BaseTemplateRegistry:
    """
    Parse base widget dashboard templates from a JSON array.

    Args:
        config_string: JSON array of base templates; empty means no entries

    Returns:
        Populated registry

    Raises:
        CatalogLoadError: if the string is not a valid list of base templates
    """
    registry = BaseTemplateRegistry()
    if not config_string or not config_string.strip():
        return registry
    try:
        templates = _BASE_TEMPLATES_ADAPTER.validate_json(config_string)
    except ValidationError as e:
        raise CatalogLoadError(f"Failed to parse base widget dashboard templates: {e}") from e
    for template in templates:
        registry.add(template)
    logger.info(f"Loaded {len(registry)} base widget dashboard templates")
    return registry


def load_widget_mappings(config_string: str) -> WidgetMappingRegistry:
    """
    Parse widget mappings from a JSON array.

    Args:
        config_string: JSON array of widget module metadata; empty means no entries

    Returns:
        Populated registry

    Raises:
        CatalogLoadError: if the string is not a valid list of widget mappings
    """
    registry = WidgetMappingRegistry()
    if not config_string or not config_string.strip():
        return registry
    try:
        mappings = _WIDGET_MAPPINGS_ADAPTER.validate_json(config_string)
    except ValidationError as e:
        raise CatalogLoadError(f"Failed to parse widget mappings: {e}") from e
    for mapping in mappings:
        registry.add(mapping)
    logger.info(f"Loaded {len(registry)} widget mappings")
    return registry


_catalogs: Optional[CatalogProvider] = None


def init_catalogs(base_templates_config: str, widget_mapping_config: str) -> CatalogProvider:
    """Load both catalogs once for the process"""
    global _catalogs
    _catalogs = CatalogProvider(
        base_templates=load_base_templates(base_templates_config),
        widget_mappings=load_widget_mappings(widget_mapping_config),
    )
    return _catalogs


def get_catalogs() -> CatalogProvider:
    """Process-wide catalogs (FastAPI dependency)"""
    if _catalogs is None:
        raise RuntimeError("catalogs were not initialized at startup")
    return _catalogs
