import pytest
from decimal import Decimal
from datetime import date
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.finances.models import Income, Expense, ProjectPayment, PaymentType
from apps.projects.models import Project, ProjectStatus
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
def manager_user(db):
    return User.objects.create_user(
        email='manager@example.com',
        password='TestPass123!',
        display_name='Manager',
        role=UserRole.MANAGER,
    )


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email='admin@example.com',
        password='TestPass123!',
        display_name='Admin',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def manager_client(manager_user):
    return _authenticate(APIClient(), manager_user)


@pytest.fixture
def admin_client(admin_user):
    return _authenticate(APIClient(), admin_user)


# =============================================================================
# Projects in known states
# =============================================================================

@pytest.fixture
def consistent_project(db):
    """Project whose stored financials and payment history match its income."""
    project = create_project(
        name='Consistent Shoot',
        status=ProjectStatus.ACTIVE,
        amount=Decimal('2000.00'),
    )
    income = Income.objects.create(
        date=date(2026, 3, 1),
        description='Deposit',
        amount=Decimal('500.00'),
        project_income=True,
        project_id=project.id,
    )
    ProjectPayment.objects.create(
        project=project,
        income=income,
        amount=Decimal('500.00'),
        payment_date=income.date,
        payment_type=PaymentType.PARTIAL,
    )
    Project.objects.filter(id=project.id).update(
        received_amt=Decimal('500.00'),
        pending_amt=Decimal('1500.00'),
        profit=Decimal('500.00'),
    )
    project.refresh_from_db()
    return project


@pytest.fixture
def short_paid_project(db):
    """1000 of income but only 700 in payment history; derived fields are up to date."""
    project = create_project(
        name='Short Paid Shoot',
        status=ProjectStatus.ACTIVE,
        amount=Decimal('1500.00'),
    )
    first = Income.objects.create(
        date=date(2026, 4, 1),
        description='First instalment',
        amount=Decimal('700.00'),
        project_income=True,
        project_id=project.id,
    )
    Income.objects.create(
        date=date(2026, 4, 20),
        description='Second instalment',
        amount=Decimal('300.00'),
        project_income=True,
        project_id=project.id,
    )
    ProjectPayment.objects.create(
        project=project,
        income=first,
        amount=Decimal('700.00'),
        payment_date=first.date,
    )
    Project.objects.filter(id=project.id).update(
        received_amt=Decimal('1000.00'),
        pending_amt=Decimal('500.00'),
        profit=Decimal('1000.00'),
    )
    project.refresh_from_db()
    return project


@pytest.fixture
def drifted_project(db):
    """Project whose stored financials ignore its child rows."""
    project = create_project(
        name='Drifted Shoot',
        amount=Decimal('3000.00'),
        outsourcing_amt=Decimal('400.00'),
    )
    Expense.objects.create(
        date=date(2026, 2, 10),
        category='Crew',
        description='Second shooter',
        amount=Decimal('250.00'),
        project_expense=True,
        project_id=project.id,
    )
    Project.objects.filter(id=project.id).update(
        received_amt=Decimal('999.00'),
        pending_amt=Decimal('0.00'),
        profit=Decimal('0.00'),
    )
    project.refresh_from_db()
    return project


@pytest.fixture
def orphaned_rows(db):
    """Income and expense rows left behind by a deleted project."""
    project = create_project(name='Cancelled Shoot', amount=Decimal('800.00'))
    income = Income.objects.create(
        date=date(2026, 1, 5),
        description='Booking fee',
        amount=Decimal('100.00'),
        project_income=True,
        project_id=project.id,
    )
    expense = Expense.objects.create(
        date=date(2026, 1, 6),
        category='Travel',
        description='Scouting',
        amount=Decimal('40.00'),
        project_expense=True,
        project_id=project.id,
    )
    Project.objects.filter(id=project.id).delete()
    return income, expense
