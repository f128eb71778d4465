"""Services for clients business logic."""

from .exceptions import (
    ClientsServiceError,
    ClientNotFoundError,
    DuplicateClientEmailError,
    ClientHasProjectsError,
)
from .client_management import (
    create_client,
    update_client,
    delete_client,
    get_client_by_id,
    search_clients,
    get_clients_for_dropdown,
    get_client_stats,
)

__all__ = [
    # Exceptions
    'ClientsServiceError',
    'ClientNotFoundError',
    'DuplicateClientEmailError',
    'ClientHasProjectsError',
    # Client Management
    'create_client',
    'update_client',
    'delete_client',
    'get_client_by_id',
    'search_clients',
    'get_clients_for_dropdown',
    'get_client_stats',
]
