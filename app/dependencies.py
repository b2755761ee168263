"""FastAPI dependency wiring"""
from fastapi import Depends
from sqlalchemy.orm import Session

from .db.repository import SQLAlchemyTemplateRepository
from .db.session import get_db
from .services.catalogs import CatalogProvider, get_catalogs
from .services.template_service import TemplateService


def get_template_service(
    db: Session = Depends(get_db),
    catalogs: CatalogProvider = Depends(get_catalogs)
) -> TemplateService:
    """Template service bound to the request's session"""
    return TemplateService(SQLAlchemyTemplateRepository(db), catalogs)
