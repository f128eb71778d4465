import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.clients.models import Client
from apps.projects.models import Project


def _authenticate(client, user):
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Read-only staff member."""
    return User.objects.create_user(
        email='viewer@example.com',
        password='TestPass123!',
        display_name='Viewer',
    )


@pytest.fixture
def manager_user(db):
    return User.objects.create_user(
        email='manager@example.com',
        password='TestPass123!',
        display_name='Manager',
        role=UserRole.MANAGER,
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """API client authenticated as a read-only user."""
    return _authenticate(api_client, user)


@pytest.fixture
def manager_client(manager_user):
    """API client authenticated as a manager."""
    return _authenticate(APIClient(), manager_user)


# =============================================================================
# Clients
# =============================================================================

@pytest.fixture
def client_acme(db):
    return Client.objects.create(
        name='Alice Moreau',
        company='Acme Weddings',
        number='+33 6 12 34 56 78',
        email='alice@acme.example',
    )


@pytest.fixture
def client_globex(db):
    return Client.objects.create(
        name='Bruno Keller',
        company='Globex Events',
        number='+41 79 000 11 22',
        email='bruno@globex.example',
    )


@pytest.fixture
def acme_project(client_acme):
    """A project owned by the Acme client."""
    return Project.objects.create(
        code='CYM-900',
        name='Acme launch',
        client=client_acme,
        amount=Decimal('5000.00'),
        pending_amt=Decimal('5000.00'),
    )
