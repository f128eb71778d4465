import pytest
from decimal import Decimal
from datetime import date
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.finances.models import Income, Expense
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
def manager_client(manager_user):
    return _authenticate(APIClient(), manager_user)


# =============================================================================
# Projects
# =============================================================================

@pytest.fixture
def project(db):
    return create_project(
        name='Harbour Gala',
        type='Event',
        status=ProjectStatus.ACTIVE,
        amount=Decimal('1000.00'),
    )


@pytest.fixture
def other_project(db):
    return create_project(
        name='Spring Lookbook',
        type='Commercial',
        amount=Decimal('2500.00'),
        outsourcing_amt=Decimal('300.00'),
    )


# =============================================================================
# Financial rows (created directly, financials are not recomputed)
# =============================================================================

@pytest.fixture
def studio_rent(db):
    """General expense not tied to a project."""
    return Expense.objects.create(
        date=date(2026, 4, 1),
        category='Rent',
        description='Studio rent April',
        amount=Decimal('1200.00'),
    )


@pytest.fixture
def workshop_income(db):
    """General income not tied to a project."""
    return Income.objects.create(
        date=date(2026, 4, 15),
        description='Lighting workshop',
        amount=Decimal('450.00'),
    )
