"""Persistence for dashboard templates"""
import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import PersistenceError
from .models import DashboardTemplate, utcnow

logger = logging.getLogger(__name__)


class TemplateRepository(ABC):
    """Abstract store of dashboard templates"""

    @abstractmethod
    def find_by_id_for_user(self, template_id: int, user_id: str) -> Optional[DashboardTemplate]:
        """
        Load a template only if it belongs to the user

        Returns:
            Template if found, None otherwise
        """
        pass

    @abstractmethod
    def first_by_id(self, template_id: int) -> Optional[DashboardTemplate]:
        """Load a template regardless of owner"""
        pass

    @abstractmethod
    def list_by_user(self, user_id: str, base_name: Optional[str] = None) -> List[DashboardTemplate]:
        """List the user's templates, optionally only those of one base"""
        pass

    @abstractmethod
    def create(self, template: DashboardTemplate) -> DashboardTemplate:
        """Insert a new template and assign its ID"""
        pass

    @abstractmethod
    def save(self, template: DashboardTemplate) -> DashboardTemplate:
        """Persist all mutable fields of an existing template"""
        pass

    @abstractmethod
    def delete_permanent(self, template: DashboardTemplate) -> None:
        """Hard delete"""
        pass

    @abstractmethod
    def clear_default(self, user_id: str, base_name: str) -> int:
        """Unset the default flag on every template of (user, base name)"""
        pass

    @abstractmethod
    def transaction(self):
        """
        Context manager grouping writes atomically.

        Commits on normal exit; rolls back and re-raises on any exception.
        """
        pass


class SQLAlchemyTemplateRepository(TemplateRepository):
    """Template repository backed by a SQLAlchemy session"""

    def __init__(self, db: Session):
        self.db = db
        self._in_transaction = False

    def find_by_id_for_user(self, template_id: int, user_id: str) -> Optional[DashboardTemplate]:
        return self.db.query(DashboardTemplate).filter(
            DashboardTemplate.id == template_id,
            DashboardTemplate.user_id == user_id
        ).first()

    def first_by_id(self, template_id: int) -> Optional[DashboardTemplate]:
        return self.db.query(DashboardTemplate).filter(
            DashboardTemplate.id == template_id
        ).first()

    def list_by_user(self, user_id: str, base_name: Optional[str] = None) -> List[DashboardTemplate]:
        query = self.db.query(DashboardTemplate).filter(DashboardTemplate.user_id == user_id)
        if base_name is not None:
            query = query.filter(DashboardTemplate.template_base_name == base_name)
        return query.order_by(DashboardTemplate.id).all()

    def create(self, template: DashboardTemplate) -> DashboardTemplate:
        self.db.add(template)
        self._commit("create dashboard template")
        return template

    def save(self, template: DashboardTemplate) -> DashboardTemplate:
        template.updated_at = utcnow()
        self.db.add(template)
        self._commit(f"save dashboard template {template.id}")
        return template

    def delete_permanent(self, template: DashboardTemplate) -> None:
        self.db.delete(template)
        self._commit(f"delete dashboard template {template.id}")

    def clear_default(self, user_id: str, base_name: str) -> int:
        try:
            return self.db.query(DashboardTemplate).filter(
                DashboardTemplate.user_id == user_id,
                DashboardTemplate.template_base_name == base_name,
                DashboardTemplate.default.is_(True)
            ).update({DashboardTemplate.default: False}, synchronize_session="fetch")
        except SQLAlchemyError as e:
            logger.error(f"Failed to unset default templates of base {base_name} for user {user_id}: {e}")
            raise PersistenceError(str(e)) from e

    @contextmanager
    def transaction(self) -> Iterator["SQLAlchemyTemplateRepository"]:
        self._in_transaction = True
        try:
            yield self
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Transaction rolled back: {e}")
            raise PersistenceError(str(e)) from e
        except Exception:
            self.db.rollback()
            raise
        finally:
            self._in_transaction = False

    def _commit(self, action: str) -> None:
        """Flush inside a transaction block, commit otherwise"""
        try:
            if self._in_transaction:
                self.db.flush()
                return
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to {action}: {e}")
            raise PersistenceError(str(e)) from e
