"""Domain-specific exceptions for clients services."""
from rest_framework.exceptions import APIException


class ClientsServiceError(Exception):
    """Base exception for clients services."""
    pass


class ClientNotFoundError(APIException):
    """Client does not exist."""
    status_code = 404
    default_detail = 'Client not found.'
    default_code = 'client_not_found'


class DuplicateClientEmailError(APIException):
    """Another client already uses this email."""
    status_code = 409
    default_detail = 'Client with this email already exists.'
    default_code = 'duplicate_client_email'


class ClientHasProjectsError(APIException):
    """Client still owns projects and cannot be deleted."""
    status_code = 409
    default_detail = 'Cannot delete client with existing projects.'
    default_code = 'client_has_projects'
