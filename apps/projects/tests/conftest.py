import pytest
from decimal import Decimal
from datetime import date
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.clients.models import Client
from apps.finances.services import create_income, create_expense
from apps.projects.models import ProjectStatus
from apps.projects.services import create_project


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
    return _authenticate(api_client, user)


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        display_name='Owner',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def manager_client(manager_user):
    return _authenticate(APIClient(), manager_user)


@pytest.fixture
def admin_client(admin_user):
    return _authenticate(APIClient(), admin_user)


# =============================================================================
# Domain data
# =============================================================================

@pytest.fixture
def studio_client(db):
    return Client.objects.create(
        name='Maya Lindqvist',
        company='Nordic Bridal',
        number='555-0142',
        email='maya@nordic.example',
    )


@pytest.fixture
def project(studio_client):
    """Active wedding shoot worth 50000 with 10000 outsourced."""
    return create_project(
        name='Lindqvist Wedding',
        company='Nordic Bridal',
        type='Wedding',
        status=ProjectStatus.ACTIVE,
        client=studio_client,
        amount=Decimal('50000.00'),
        outsourcing=True,
        outsourcing_amt=Decimal('10000.00'),
        shoot_start_date=date(2026, 6, 12),
        shoot_end_date=date(2026, 6, 13),
    )


@pytest.fixture
def pending_project(db):
    """Project with no client and no activity."""
    return create_project(
        name='Catalogue Shoot',
        company='Urban Threads',
        type='Commercial',
        amount=Decimal('8000.00'),
    )


@pytest.fixture
def project_with_activity(project):
    """The wedding project with 20000 received and 5000 spent."""
    create_income(
        date=date(2026, 5, 2),
        description='Advance',
        amount=Decimal('20000.00'),
        project_id=project.id,
    )
    create_expense(
        date=date(2026, 6, 12),
        category='Travel',
        description='Flights',
        amount=Decimal('5000.00'),
        project_id=project.id,
    )
    project.refresh_from_db()
    return project
