"""
Shared fixtures: in-memory SQLite database, swappable catalogs and a test client
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.models import Base, DashboardTemplate
from app.db.repository import SQLAlchemyTemplateRepository
from app.db.session import get_db
from app.main import app
from app.models import BaseWidgetDashboardTemplate, WidgetModuleFederationMetadata
from app.services.catalogs import (
    BaseTemplateRegistry,
    CatalogProvider,
    WidgetMappingRegistry,
    get_catalogs,
)
from app.services.template_service import TemplateService

from tests.helpers import HOME_CONFIG, LANDING_CONFIG, layout, widget_item


@pytest.fixture
def engine():
    """Fresh in-memory database per test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def catalogs():
    """Catalogs with a "landing" and a "home" base template"""
    base_templates = BaseTemplateRegistry([
        BaseWidgetDashboardTemplate.model_validate({
            "name": "landing",
            "displayName": "Landing Page",
            "templateConfig": LANDING_CONFIG,
            "frontendRef": "landing",
        }),
        BaseWidgetDashboardTemplate.model_validate({
            "name": "home",
            "displayName": "Home",
            "templateConfig": HOME_CONFIG,
        }),
    ])
    widget_mappings = WidgetMappingRegistry([
        WidgetModuleFederationMetadata.model_validate({
            "scope": "insights",
            "module": "./RecentlyVisited",
            "config": {"title": "Recently visited", "icon": "history"},
            "defaults": {"w": 1, "h": 4, "maxH": 10, "minH": 1},
        }),
        WidgetModuleFederationMetadata.model_validate({
            "scope": "landing",
            "module": "./Explore",
            "importName": "ExploreCapabilities",
            "featureFlag": "platform.landing.explore",
            "config": {
                "title": "Explore capabilities",
                "icon": "rocket",
                "headerLink": {"name": "View all", "href": "/explore"},
                "permissions": [{"method": "isOrgAdmin"}],
            },
            "defaults": {"w": 2, "h": 6, "maxH": 10, "minH": 1},
        }),
    ])
    return CatalogProvider(base_templates=base_templates, widget_mappings=widget_mappings)


@pytest.fixture
def repository(db_session):
    return SQLAlchemyTemplateRepository(db_session)


@pytest.fixture
def service(repository, catalogs):
    return TemplateService(repository, catalogs)


@pytest.fixture
def create_template(session_factory):
    """Insert a template directly and return its ID"""
    def _create(user_id="user-123", base_name="mock-template", display_name="Mock Template Display",
                config=None, default=False):
        session = session_factory()
        try:
            template = DashboardTemplate(
                user_id=user_id,
                template_base_name=base_name,
                template_base_display_name=display_name,
                default=default,
            )
            for bp, items in (config or layout(widget_item(title="Sample Widget"))).items():
                setattr(template, bp, items)
            session.add(template)
            session.commit()
            return template.id
        finally:
            session.close()
    return _create


@pytest.fixture
def load_template(session_factory):
    """Read a template back through a fresh session; None when absent"""
    def _load(template_id):
        session = session_factory()
        try:
            template = session.get(DashboardTemplate, template_id)
            if template is not None:
                session.expunge(template)
            return template
        finally:
            session.close()
    return _load


@pytest.fixture
def client(session_factory, catalogs):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_catalogs] = lambda: catalogs
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
