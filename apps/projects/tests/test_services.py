import pytest
from decimal import Decimal
from datetime import date
from apps.finances.models import Income, Expense
from apps.finances.services import create_income
from apps.projects.models import Project, ProjectStatus, PaymentStatus
from apps.projects.services import (
    derive_financials,
    recompute_project_financials,
    recompute_projects,
    create_project,
    update_project,
    delete_project,
    get_project_by_code,
    get_projects_by_payment_status,
    get_project_stats,
    ProjectNotFoundError,
    ProjectHasFinancialRecordsError,
    ForceDeleteDisabledError,
    InvalidPaymentStatusError,
)


# =============================================================================
# derive_financials
# =============================================================================

class TestDeriveFinancials:
    """The formula, without the database."""

    def test_no_child_rows(self):
        financials = derive_financials(
            amount=Decimal('1200.00'),
            outsourcing_amt=Decimal('200.00'),
            income_amounts=[],
            expense_amounts=[],
        )

        assert financials.received_amt == Decimal('0.00')
        assert financials.pending_amt == Decimal('1200.00')
        assert financials.profit == Decimal('-200.00')
        assert financials.payments_total == Decimal('0.00')

    def test_income_expense_and_outsourcing(self):
        financials = derive_financials(
            amount=Decimal('50000.00'),
            outsourcing_amt=Decimal('10000.00'),
            income_amounts=[Decimal('20000.00')],
            expense_amounts=[Decimal('5000.00')],
        )

        assert financials.received_amt == Decimal('20000.00')
        assert financials.pending_amt == Decimal('30000.00')
        assert financials.profit == Decimal('5000.00')

    def test_overpayment_gives_negative_pending(self):
        financials = derive_financials(
            amount=Decimal('1000.00'),
            outsourcing_amt=Decimal('0.00'),
            income_amounts=[Decimal('700.00'), Decimal('500.00')],
            expense_amounts=[],
        )

        assert financials.pending_amt == Decimal('-200.00')

    def test_payment_shortfall(self):
        financials = derive_financials(
            amount=Decimal('1000.00'),
            outsourcing_amt=Decimal('0.00'),
            income_amounts=[Decimal('1000.00')],
            expense_amounts=[],
            payment_amounts=[Decimal('700.00')],
        )

        assert financials.payment_shortfall == Decimal('300.00')

    def test_none_amounts_count_as_zero(self):
        financials = derive_financials(
            amount=None,
            outsourcing_amt=None,
            income_amounts=[None, '10.50'],
            expense_amounts=[],
        )

        assert financials.received_amt == Decimal('10.50')
        assert financials.pending_amt == Decimal('-10.50')


# =============================================================================
# Recompute
# =============================================================================

@pytest.mark.django_db
class TestRecompute:

    def test_new_project_has_initial_financials(self, project):
        assert project.received_amt == Decimal('0.00')
        assert project.pending_amt == Decimal('50000.00')
        assert project.profit == Decimal('-10000.00')

    def test_child_rows_drive_financials(self, project_with_activity):
        assert project_with_activity.received_amt == Decimal('20000.00')
        assert project_with_activity.pending_amt == Decimal('30000.00')
        assert project_with_activity.profit == Decimal('5000.00')

    def test_recompute_repairs_drift(self, project_with_activity):
        Project.objects.filter(id=project_with_activity.id).update(
            received_amt=Decimal('1.00'),
            profit=Decimal('999.00'),
        )

        project = recompute_project_financials(project_id=project_with_activity.id)

        assert project.received_amt == Decimal('20000.00')
        assert project.profit == Decimal('5000.00')

    def test_recompute_is_idempotent(self, project_with_activity):
        first = recompute_project_financials(project_id=project_with_activity.id)
        second = recompute_project_financials(project_id=project_with_activity.id)

        assert (first.received_amt, first.pending_amt, first.profit) == (
            second.received_amt, second.pending_amt, second.profit
        )

    def test_recompute_missing_project(self, db):
        with pytest.raises(ProjectNotFoundError):
            recompute_project_financials(project_id=9999)

    def test_recompute_projects_skips_missing_ids(self, project):
        recompute_projects(None, 9999, project.id)

        project.refresh_from_db()
        assert project.pending_amt == Decimal('50000.00')


# =============================================================================
# CRUD
# =============================================================================

@pytest.mark.django_db
class TestProjectLifecycle:

    def test_code_uses_prefix_and_id(self, project):
        assert project.code == f'CYM-{project.id}'

    def test_code_prefix_is_configurable(self, settings, db):
        settings.PROJECT_CODE_PREFIX = 'STU'

        project = create_project(name='Portraits', amount=Decimal('300.00'))

        assert project.code == f'STU-{project.id}'

    def test_status_is_uppercased(self, db):
        project = create_project(name='Event', amount=Decimal('100.00'), status='active')

        assert project.status == ProjectStatus.ACTIVE

    def test_update_amount_recomputes_pending(self, project_with_activity):
        project = update_project(
            project_id=project_with_activity.id,
            data={'amount': Decimal('60000.00')},
        )

        assert project.pending_amt == Decimal('40000.00')
        assert project.received_amt == Decimal('20000.00')

    def test_update_ignores_derived_fields(self, project):
        project = update_project(
            project_id=project.id,
            data={'received_amt': Decimal('123.00'), 'code': 'HACK-1', 'name': 'Renamed'},
        )

        assert project.name == 'Renamed'
        assert project.received_amt == Decimal('0.00')
        assert project.code == f'CYM-{project.id}'

    def test_update_missing_project(self, db):
        with pytest.raises(ProjectNotFoundError):
            update_project(project_id=9999, data={'name': 'x'})

    def test_delete_project_without_records(self, pending_project):
        delete_project(project_id=pending_project.id)

        assert not Project.objects.filter(id=pending_project.id).exists()

    def test_delete_with_records_requires_force(self, project_with_activity):
        with pytest.raises(ProjectHasFinancialRecordsError):
            delete_project(project_id=project_with_activity.id)

        assert Project.objects.filter(id=project_with_activity.id).exists()

    def test_force_delete_disabled_by_default(self, settings, project_with_activity):
        settings.PROJECT_FORCE_DELETE_ENABLED = False

        with pytest.raises(ForceDeleteDisabledError):
            delete_project(project_id=project_with_activity.id, force=True)

        assert Income.objects.filter(project_id=project_with_activity.id).count() == 1

    def test_force_delete_removes_records(self, settings, project_with_activity):
        settings.PROJECT_FORCE_DELETE_ENABLED = True

        delete_project(project_id=project_with_activity.id, force=True)

        assert not Project.objects.filter(id=project_with_activity.id).exists()
        assert not Income.objects.filter(project_id=project_with_activity.id).exists()
        assert not Expense.objects.filter(project_id=project_with_activity.id).exists()

    def test_get_by_code_is_case_insensitive(self, project):
        found = get_project_by_code(project.code.lower())

        assert found.id == project.id

    def test_get_by_unknown_code(self, db):
        with pytest.raises(ProjectNotFoundError):
            get_project_by_code('CYM-0')


# =============================================================================
# Payment status buckets and stats
# =============================================================================

@pytest.mark.django_db
class TestPaymentStatus:

    def test_buckets_are_disjoint(self, project, pending_project):
        completed = create_project(
            name='Delivered Album',
            amount=Decimal('900.00'),
            status=ProjectStatus.COMPLETED,
        )

        ongoing = [p['id'] for p in get_projects_by_payment_status('ongoing')]
        pending = [p['id'] for p in get_projects_by_payment_status('pending')]
        done = [p['id'] for p in get_projects_by_payment_status('completed')]

        assert ongoing == [project.id]
        assert pending == [pending_project.id]
        assert done == [completed.id]

    def test_fully_paid_project_is_completed(self, pending_project):
        create_income(
            date=date(2026, 3, 1),
            description='Full payment',
            amount=Decimal('8000.00'),
            project_id=pending_project.id,
        )

        rows = get_projects_by_payment_status('completed')

        assert [r['id'] for r in rows] == [pending_project.id]
        assert rows[0]['status'] == PaymentStatus.COMPLETED
        assert get_projects_by_payment_status('pending') == []

    def test_row_shape(self, project):
        row = get_projects_by_payment_status('ONGOING')[0]

        assert row['code'] == project.code
        assert row['client_name'] == 'Maya Lindqvist'
        assert row['client_initial'] == 'M'
        assert row['pending_amt'] == Decimal('50000.00')

    def test_project_without_client(self, pending_project):
        row = get_projects_by_payment_status('pending')[0]

        assert row['client_name'] == 'Unknown'
        assert row['client_initial'] == 'U'

    def test_unknown_bucket(self, db):
        with pytest.raises(InvalidPaymentStatusError):
            get_projects_by_payment_status('overdue')

    def test_stats(self, project_with_activity, pending_project):
        stats = get_project_stats()

        assert stats['total_projects'] == 2
        assert stats['total_revenue'] == Decimal('58000.00')
        assert stats['total_pending'] == Decimal('38000.00')
        assert stats['total_profit'] == Decimal('5000.00')
        assert stats['average_project_value'] == Decimal('29000.00')
        assert {'status': ProjectStatus.ACTIVE, 'count': 1} in stats['status_breakdown']

    def test_stats_empty(self, db):
        stats = get_project_stats()

        assert stats['total_projects'] == 0
        assert stats['total_revenue'] == Decimal('0.00')
        assert stats['average_project_value'] == Decimal('0.00')
        assert stats['status_breakdown'] == []
