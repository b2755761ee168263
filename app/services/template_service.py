"""Dashboard template business logic"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..db.models import DashboardTemplate
from ..db.repository import TemplateRepository
from ..errors import (
    BaseTemplateNotFoundError,
    ForbiddenError,
    InternalServiceError,
    PersistenceError,
    TemplateNotFoundError,
)
from ..models import (
    BaseWidgetDashboardTemplate,
    DashboardTemplateConfig,
    WidgetModuleFederationMetadata,
)
from .catalogs import CatalogProvider

logger = logging.getLogger(__name__)


@dataclass
class TemplateListResult:
    """Templates returned by a list call; ``provisioned`` marks a freshly forked default"""
    templates: List[DashboardTemplate] = field(default_factory=list)
    provisioned: bool = False


class TemplateService:
    """Lifecycle operations on personal dashboard templates"""

    def __init__(self, repository: TemplateRepository, catalogs: CatalogProvider):
        self.repository = repository
        self.catalogs = catalogs

    # Reads

    def list_templates(self, user_id: str, dashboard_type: Optional[str] = None) -> TemplateListResult:
        """
        List the user's templates.

        When filtering by dashboard type finds nothing and a base template of
        that name exists, a default copy of the base is created for the user
        and returned with ``provisioned=True``.

        Args:
            user_id: Caller
            dashboard_type: Optional base template name filter

        Returns:
            Matching templates
        """
        if not dashboard_type:
            return TemplateListResult(templates=self.repository.list_by_user(user_id))

        templates = self.repository.list_by_user(user_id, dashboard_type)
        if templates:
            return TemplateListResult(templates=templates)

        base = self.catalogs.base_templates.get(dashboard_type)
        if base is None:
            logger.warning(f"Base template {dashboard_type} not found for user {user_id}")
            raise BaseTemplateNotFoundError(f"base template {dashboard_type} not found")

        template = DashboardTemplate.from_base(base, user_id)
        template.default = True
        try:
            self.repository.create(template)
        except PersistenceError as e:
            # a concurrent request provisioned the default first
            templates = self.repository.list_by_user(user_id, dashboard_type)
            if not templates:
                raise InternalServiceError(str(e)) from e
            logger.info(f"Default {dashboard_type} template for user {user_id} was provisioned concurrently")
            return TemplateListResult(templates=templates)
        logger.info(
            f"Provisioned default dashboard template {template.id} from base {dashboard_type} for user {user_id}"
        )
        return TemplateListResult(templates=[template], provisioned=True)

    def get_template(self, template_id: int, user_id: str) -> DashboardTemplate:
        template = self.repository.find_by_id_for_user(template_id, user_id)
        if template is None:
            logger.warning(f"Dashboard template with ID {template_id} not found for user {user_id}")
            raise TemplateNotFoundError(f"Dashboard template with ID {template_id} not found")
        return template

    # Mutations

    def update_template(self, template_id: int, config: DashboardTemplateConfig, user_id: str) -> DashboardTemplate:
        """
        Replace the layout of a template.

        Name, display name and default flag are left untouched.
        """
        template = self._load_owned(template_id, user_id)
        logger.info(f"Updating dashboard template with ID: {template_id}")
        template.apply_config(config)
        return self._persist(self.repository.save, template)

    def delete_template(self, template_id: int, user_id: str) -> None:
        template = self._load_owned(template_id, user_id)
        logger.info(f"Deleting dashboard template with ID: {template_id}")
        # permanent, there is no restore
        self._persist(self.repository.delete_permanent, template)

    def copy_template(self, template_id: int, user_id: str) -> DashboardTemplate:
        """
        Copy any template into a new one owned by the caller.

        There is no ownership check: every authenticated user may copy every
        template. The copy is never default.
        """
        source = self._load(template_id)
        template = self._persist(self.repository.create, source.copy_for(user_id))
        logger.info(f"Copied dashboard template {template_id} to {template.id} for user {user_id}")
        return template

    def reset_template(self, template_id: int, user_id: str) -> DashboardTemplate:
        """
        Restore the layout of a template from its base template.

        Args:
            template_id: Template to reset
            user_id: Caller, must own the template

        Returns:
            The reset template

        Raises:
            BaseTemplateNotFoundError: the base template is no longer in the catalog
        """
        template = self._load_owned(template_id, user_id)
        base_name = template.template_base_name
        base = self.catalogs.base_templates.get(base_name)
        if base is None:
            logger.error(f"Base template {base_name} not found for resetting dashboard template with ID {template_id}")
            raise BaseTemplateNotFoundError(f"base template {base_name} not found")

        template.apply_config(base.template_config)
        self._persist(self.repository.save, template)
        logger.info(f"Dashboard template with ID {template_id} reset to base template {base_name}")
        return template

    def fork_base_template(self, base_name: str, user_id: str) -> DashboardTemplate:
        base = self.get_base_template(base_name)
        template = self._persist(self.repository.create, DashboardTemplate.from_base(base, user_id))
        logger.info(
            f"Forked base template {base_name} to dashboard template with ID {template.id} for user {user_id}"
        )
        return template

    def set_default_template(self, template_id: int, user_id: str) -> DashboardTemplate:
        """
        Make a template the user's default for its base name.

        Unsetting the previous default and setting the new one happen in a
        single transaction; on failure neither change is visible.
        """
        template = self._load_owned(template_id, user_id)
        base_name = template.template_base_name
        try:
            with self.repository.transaction():
                self.repository.clear_default(user_id, base_name)
                template.default = True
                self.repository.save(template)
        except PersistenceError as e:
            raise InternalServiceError(
                f"Failed to change default dashboard template with ID {template_id}: {e}"
            ) from e
        logger.info(f"Dashboard template {template_id} is now the default {base_name} template for user {user_id}")
        return template

    # Catalogs

    def list_base_templates(self) -> List[BaseWidgetDashboardTemplate]:
        return list(self.catalogs.base_templates.all().values())

    def get_base_template(self, base_name: str) -> BaseWidgetDashboardTemplate:
        base = self.catalogs.base_templates.get(base_name)
        if base is None:
            logger.warning(f"Base template {base_name} not found")
            raise BaseTemplateNotFoundError(f"base template {base_name} not found")
        return base

    def get_widget_mappings(self) -> Dict[str, WidgetModuleFederationMetadata]:
        mappings = self.catalogs.widget_mappings.all()
        logger.debug(f"Retrieved {len(mappings)} widget mappings")
        return mappings

    # Helpers

    def _load(self, template_id: int) -> DashboardTemplate:
        template = self.repository.first_by_id(template_id)
        if template is None:
            logger.warning(f"Dashboard template with ID {template_id} not found")
            raise TemplateNotFoundError(f"Dashboard template with ID {template_id} not found")
        return template

    def _load_owned(self, template_id: int, user_id: str) -> DashboardTemplate:
        template = self._load(template_id)
        if template.user_id != user_id:
            logger.warning(f"User {user_id} is not authorized to access template with ID {template_id}")
            raise ForbiddenError("unauthorized")
        return template

    @staticmethod
    def _persist(operation, template: DashboardTemplate):
        """Run a repository write, mapping persistence failures to internal errors"""
        try:
            result = operation(template)
        except PersistenceError as e:
            raise InternalServiceError(str(e)) from e
        return template if result is None else result
