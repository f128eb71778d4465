import pytest
from decimal import Decimal
from datetime import date
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.clients.models import Client
from apps.finances.models import Income, Expense
from apps.projects.models import ProjectStatus
from apps.projects.services import create_project


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
def authenticated_client(api_client, user):
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def today():
    """Fixed reference day for month arithmetic."""
    return date(2026, 3, 15)


@pytest.fixture
def ledger(db):
    """
    A small studio ledger.

    Income: 1000 (Jan, project), 500 (Mar, project), 200 (Mar, general)
    Expenses: Rent 600 (Jan), Travel 300 (Mar, project), Rent 100 (Mar)
    """
    client = Client.objects.create(name='Ines Duarte', company='Duarte Events', number='555-0188')
    project = create_project(
        name='Duarte Gala',
        status=ProjectStatus.ACTIVE,
        client=client,
        amount=Decimal('4000.00'),
        outsourcing_amt=Decimal('250.00'),
    )
    Income.objects.create(
        date=date(2026, 1, 10), description='Deposit', amount=Decimal('1000.00'),
        project_income=True, project_id=project.id,
    )
    Income.objects.create(
        date=date(2026, 3, 2), description='Second instalment', amount=Decimal('500.00'),
        project_income=True, project_id=project.id,
    )
    Income.objects.create(
        date=date(2026, 3, 5), description='Print sale', amount=Decimal('200.00'),
    )
    Expense.objects.create(
        date=date(2026, 1, 1), category='Rent', description='Studio rent', amount=Decimal('600.00'),
    )
    Expense.objects.create(
        date=date(2026, 3, 3), category='Travel', description='Venue scouting', amount=Decimal('300.00'),
        project_expense=True, project_id=project.id,
    )
    Expense.objects.create(
        date=date(2026, 3, 4), category='Rent', description='Storage unit', amount=Decimal('100.00'),
    )
    return project
