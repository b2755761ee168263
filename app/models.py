"""Pydantic models for API requests/responses"""
from typing import List, Dict, Any, Optional
from datetime import datetime
from pydantic import BaseModel, Field, model_validator


BREAKPOINTS = ("sm", "md", "lg", "xl")


# Layout Models
class WidgetItem(BaseModel):
    """
    One tile of a breakpoint grid.

    Coordinates are accepted either as ``x``/``y`` or as the legacy
    ``cx``/``cy`` pair. YAML to JSON conversions turn a bare ``y`` key into
    boolean ``true``, so layouts authored in YAML carry ``cx``/``cy`` instead.
    Only ``x``/``y`` are ever emitted.
    """
    widget_type: str = Field(..., alias="i", min_length=1)
    width: int = Field(..., alias="w", ge=1)
    height: int = Field(..., alias="h", ge=1)
    min_height: int = Field(..., alias="minH")
    max_height: int = Field(..., alias="maxH")
    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)
    static: bool = False
    title: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def resolve_coordinates(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if data.get("x") is not None and data.get("y") is not None:
            return data
        if data.get("cx") is not None and data.get("cy") is not None:
            resolved = {k: v for k, v in data.items() if k not in ("cx", "cy")}
            resolved["x"] = data["cx"]
            resolved["y"] = data["cy"]
            return resolved
        raise ValueError("invalid widget item: either x/y or cx/cy coordinates are required")

    @model_validator(mode="after")
    def check_height_bounds(self) -> "WidgetItem":
        if not self.min_height <= self.height <= self.max_height:
            raise ValueError(
                f"invalid widget item: height {self.height} outside "
                f"[{self.min_height}, {self.max_height}]"
            )
        return self

    class Config:
        populate_by_name = True


class DashboardTemplateConfig(BaseModel):
    """Widget layouts for all four breakpoints"""
    sm: List[WidgetItem]
    md: List[WidgetItem]
    lg: List[WidgetItem]
    xl: List[WidgetItem]

    def to_storage(self) -> Dict[str, List[Dict[str, Any]]]:
        """Plain JSON-ready layouts keyed by breakpoint"""
        return {
            bp: [item.model_dump(by_alias=True) for item in getattr(self, bp)]
            for bp in BREAKPOINTS
        }


class DashboardTemplateBase(BaseModel):
    """Link between a personal template and a base template"""
    name: str = Field(..., min_length=1)
    display_name: str = Field("", alias="displayName")

    class Config:
        populate_by_name = True


# Request Models
class DashboardTemplateUpdate(BaseModel):
    """
    Template update request.

    Clients send the whole template back; only the layout is applied.
    """
    id: Optional[int] = None
    user_id: Optional[str] = Field(None, alias="userId")
    template_base: Optional[DashboardTemplateBase] = Field(None, alias="templateBase")
    template_config: DashboardTemplateConfig = Field(..., alias="templateConfig")
    default: Optional[bool] = None

    class Config:
        populate_by_name = True


# Response Models
class DashboardTemplateResponse(BaseModel):
    """Dashboard template response"""
    id: int
    user_id: str = Field(..., alias="userId")
    template_base: DashboardTemplateBase = Field(..., alias="templateBase")
    template_config: DashboardTemplateConfig = Field(..., alias="templateConfig")
    default: bool
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    class Config:
        populate_by_name = True

    @classmethod
    def from_entity(cls, template) -> "DashboardTemplateResponse":
        return cls(
            id=template.id,
            user_id=template.user_id,
            template_base=template.template_base,
            template_config=template.template_config,
            default=template.default,
            created_at=template.created_at,
            updated_at=template.updated_at,
        )


class ListMeta(BaseModel):
    """List metadata"""
    count: int


class DashboardTemplateListResponse(BaseModel):
    """List of dashboard templates"""
    data: List[DashboardTemplateResponse]
    meta: ListMeta

    @classmethod
    def from_entities(cls, templates) -> "DashboardTemplateListResponse":
        data = [DashboardTemplateResponse.from_entity(t) for t in templates]
        return cls(data=data, meta=ListMeta(count=len(data)))


# Catalog Models
class BaseWidgetDashboardTemplate(BaseModel):
    """Base template blueprint supplied by administrators"""
    name: str = Field(..., min_length=1)
    display_name: str = Field("", alias="displayName")
    template_config: DashboardTemplateConfig = Field(..., alias="templateConfig")
    frontend_ref: Optional[str] = Field(None, alias="frontendRef")

    class Config:
        populate_by_name = True


class BaseTemplateListResponse(BaseModel):
    """List of base templates"""
    data: List[BaseWidgetDashboardTemplate]
    meta: ListMeta


class WidgetHeaderLink(BaseModel):
    """Link rendered in a widget header"""
    name: str
    href: str


class WidgetPermission(BaseModel):
    """Front-end permission check guarding a widget"""
    method: str
    args: Optional[List[Any]] = None


class WidgetConfiguration(BaseModel):
    """Presentation settings of a widget"""
    title: str
    icon: str = ""
    header_link: Optional[WidgetHeaderLink] = Field(None, alias="headerLink")
    permissions: Optional[List[WidgetPermission]] = None

    class Config:
        populate_by_name = True


class WidgetBaseDimensions(BaseModel):
    """Initial dimensions of a newly placed widget"""
    width: Optional[int] = Field(None, alias="w")
    height: Optional[int] = Field(None, alias="h")
    max_height: Optional[int] = Field(None, alias="maxH")
    min_height: Optional[int] = Field(None, alias="minH")

    class Config:
        populate_by_name = True


class WidgetModuleFederationMetadata(BaseModel):
    """How the front-end loads a widget module"""
    scope: str
    module: str
    import_name: Optional[str] = Field(None, alias="importName")
    feature_flag: Optional[str] = Field(None, alias="featureFlag")
    config: WidgetConfiguration
    defaults: WidgetBaseDimensions = Field(default_factory=WidgetBaseDimensions)

    class Config:
        populate_by_name = True

    def widget_key(self) -> str:
        """Composite key "scope-module", suffixed with "-importName" when set"""
        key = f"{self.scope}-{self.module}"
        if self.import_name:
            key = f"{key}-{self.import_name}"
        return key


class WidgetMappingResponse(BaseModel):
    """Widget mappings keyed by composite widget key"""
    data: Dict[str, WidgetModuleFederationMetadata]


# Error Models
class ErrorPayload(BaseModel):
    """Single error entry"""
    code: int
    message: str


class ErrorResponse(BaseModel):
    """Error envelope"""
    errors: List[ErrorPayload]


class HealthCheckResponse(BaseModel):
    """Health check response"""
    status: str
    service: str
    version: str
    timestamp: str
    dependencies: Dict[str, str]
