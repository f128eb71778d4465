"""Client CRUD and statistics service."""

import logging
from decimal import Decimal
from typing import Optional, Dict, Any

from django.db import transaction
from django.db.models import Count, Q, Sum, DecimalField, Value
from django.db.models.functions import Coalesce

from ..models import Client
from .exceptions import ClientNotFoundError, DuplicateClientEmailError, ClientHasProjectsError

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ['name', 'company', 'number', 'email']


def _with_project_totals(queryset):
    return queryset.annotate(
        project_count=Count('projects', distinct=True),
        total_amount=Coalesce(
            Sum('projects__amount'),
            Value(Decimal('0.00')),
            output_field=DecimalField(max_digits=14, decimal_places=2),
        ),
    )


def _ensure_email_free(email: str, exclude_id: Optional[int] = None) -> None:
    if not email:
        return
    taken = Client.objects.filter(email__iexact=email)
    if exclude_id is not None:
        taken = taken.exclude(id=exclude_id)
    if taken.exists():
        raise DuplicateClientEmailError()


@transaction.atomic
def create_client(
    *,
    name: str,
    company: str,
    number: str,
    email: str = ''
) -> Client:
    """
    Create a new client.

    Raises:
        DuplicateClientEmailError: If a client with the email exists
    """
    _ensure_email_free(email)

    client = Client.objects.create(
        name=name,
        company=company,
        number=number,
        email=email,
    )
    logger.info("Client created: %s (%s)", client.name, client.company)
    return client


@transaction.atomic
def update_client(*, client_id: int, data: Dict[str, Any]) -> Client:
    """
    Update an existing client.

    Raises:
        ClientNotFoundError: If client doesn't exist
        DuplicateClientEmailError: If the new email belongs to another client
    """
    try:
        client = Client.objects.select_for_update().get(id=client_id)
    except Client.DoesNotExist:
        raise ClientNotFoundError()

    if 'email' in data:
        _ensure_email_free(data['email'], exclude_id=client.id)

    for field, value in data.items():
        if field in UPDATABLE_FIELDS:
            setattr(client, field, value)

    client.save()
    logger.info("Client updated: %s (%s)", client.name, client.company)
    return client


@transaction.atomic
def delete_client(*, client_id: int) -> None:
    """
    Delete a client without projects.

    Raises:
        ClientNotFoundError: If client doesn't exist
        ClientHasProjectsError: If the client still owns projects
    """
    try:
        client = Client.objects.select_for_update().get(id=client_id)
    except Client.DoesNotExist:
        raise ClientNotFoundError()

    if client.projects.exists():
        raise ClientHasProjectsError()

    client.delete()
    logger.info("Client deleted: %s (%s)", client.name, client.company)


def get_client_by_id(client_id: int) -> Client:
    try:
        return _with_project_totals(Client.objects.all()).get(id=client_id)
    except Client.DoesNotExist:
        raise ClientNotFoundError()


def search_clients(*, search: Optional[str] = None):
    """Return clients annotated with project totals, optionally filtered."""
    queryset = Client.objects.all()
    if search:
        queryset = queryset.filter(
            Q(name__icontains=search) |
            Q(company__icontains=search) |
            Q(number__icontains=search) |
            Q(email__icontains=search)
        )
    return _with_project_totals(queryset).order_by('name')


def get_clients_for_dropdown():
    return list(Client.objects.order_by('name').values('id', 'name', 'company'))


def get_client_stats() -> Dict[str, Any]:
    """
    Aggregate client statistics.

    Returns:
        Dict with total_clients, clients_with_projects, total_projects,
        total_revenue and average_projects_per_client
    """
    from apps.projects.models import Project

    total_clients = Client.objects.count()
    clients_with_projects = (
        Client.objects
        .annotate(project_count=Count('projects'))
        .filter(project_count__gt=0)
        .count()
    )
    project_totals = Project.objects.aggregate(
        total_projects=Count('id'),
        total_revenue=Sum('amount'),
    )
    total_projects = project_totals['total_projects']
    average = (
        round(total_projects / total_clients, 2) if total_clients else 0
    )

    return {
        'total_clients': total_clients,
        'clients_with_projects': clients_with_projects,
        'total_projects': total_projects,
        'total_revenue': project_totals['total_revenue'] or Decimal('0.00'),
        'average_projects_per_client': average,
    }
