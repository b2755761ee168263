"""Service exceptions and their HTTP mapping"""
from fastapi import status


class TemplateServiceError(Exception):
    """Base error surfaced by the template service"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TemplateNotFoundError(TemplateServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class ForbiddenError(TemplateServiceError):
    status_code = status.HTTP_403_FORBIDDEN


class BaseTemplateNotFoundError(TemplateServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class InternalServiceError(TemplateServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class PersistenceError(Exception):
    """A database write or commit failed and was rolled back"""


class CatalogLoadError(Exception):
    """A startup catalog could not be parsed"""


class InvalidIdentityError(Exception):
    """The identity header is missing or cannot be decoded"""
