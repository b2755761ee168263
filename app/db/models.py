"""SQLAlchemy database models"""
from datetime import datetime, timezone
from typing import Any, Dict, List
from sqlalchemy import Column, String, Integer, DateTime, Boolean, JSON, Index
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base, validates

from ..models import BREAKPOINTS, BaseWidgetDashboardTemplate, DashboardTemplateConfig

Base = declarative_base()

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
LayoutJSON = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    """Naive UTC timestamp"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class DashboardTemplate(Base):
    """Personal dashboard template"""
    __tablename__ = "dashboard_templates"
    __table_args__ = (
        Index("ix_dashboard_templates_user_base", "user_id", "template_base_name"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    user_id = Column(String(255), nullable=False, index=True)
    template_base_name = Column(String(255), nullable=False)
    template_base_display_name = Column(String(255), nullable=False, default="")
    default = Column(Boolean, nullable=False, default=False)
    sm = Column(LayoutJSON, nullable=False)
    md = Column(LayoutJSON, nullable=False)
    lg = Column(LayoutJSON, nullable=False)
    xl = Column(LayoutJSON, nullable=False)

    @validates("user_id")
    def validate_user_id(self, key, value):
        if not value:
            raise ValueError("dashboard template must have an owner")
        return value

    @property
    def template_base(self) -> Dict[str, str]:
        return {
            "name": self.template_base_name,
            "displayName": self.template_base_display_name or "",
        }

    @property
    def template_config(self) -> Dict[str, List[Dict[str, Any]]]:
        return {bp: list(getattr(self, bp) or []) for bp in BREAKPOINTS}

    def apply_config(self, config: DashboardTemplateConfig) -> None:
        """Replace all four breakpoint layouts"""
        for bp, items in config.to_storage().items():
            setattr(self, bp, items)

    @classmethod
    def from_base(cls, base: BaseWidgetDashboardTemplate, user_id: str) -> "DashboardTemplate":
        """Unsaved personal template seeded from a base template"""
        template = cls(
            user_id=user_id,
            template_base_name=base.name,
            template_base_display_name=base.display_name,
            default=False,
        )
        template.apply_config(base.template_config)
        return template

    def copy_for(self, user_id: str) -> "DashboardTemplate":
        """Unsaved copy owned by ``user_id``; never default"""
        template = DashboardTemplate(
            user_id=user_id,
            template_base_name=self.template_base_name,
            template_base_display_name=self.template_base_display_name,
            default=False,
        )
        for bp in BREAKPOINTS:
            setattr(template, bp, [dict(item) for item in getattr(self, bp) or []])
        return template

    def __repr__(self) -> str:
        return (
            f"<DashboardTemplate id={self.id} user_id={self.user_id!r} "
            f"base={self.template_base_name!r} default={self.default}>"
        )


# At most one default per (user, base name)
Index(
    "uq_dashboard_templates_user_base_default",
    DashboardTemplate.user_id,
    DashboardTemplate.template_base_name,
    unique=True,
    postgresql_where=DashboardTemplate.default.is_(True),
    sqlite_where=DashboardTemplate.default.is_(True),
)
