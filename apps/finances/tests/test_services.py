import pytest
from decimal import Decimal
from datetime import date
from apps.finances.models import Income, ProjectPayment, PaymentType
from apps.finances.services import (
    create_income,
    update_income,
    delete_income,
    create_expense,
    update_expense,
    delete_expense,
    create_payment,
    update_payment,
    delete_payment,
    record_project_payment,
    get_project_payment_history,
    get_expense_categories,
    IncomeNotFoundError,
    InvalidProjectReferenceError,
    InvalidIncomeReferenceError,
    InvalidAmountError,
)
from apps.projects.services import ProjectNotFoundError


def _refresh(project):
    project.refresh_from_db()
    return project


# =============================================================================
# Income
# =============================================================================

@pytest.mark.django_db
class TestIncomeService:

    def test_create_income_recomputes_project(self, project):
        income = create_income(
            date=date(2026, 5, 1),
            description='Deposit',
            amount=Decimal('400.00'),
            project_id=project.id,
        )

        assert income.project_income is True
        project = _refresh(project)
        assert project.received_amt == Decimal('400.00')
        assert project.pending_amt == Decimal('600.00')
        assert project.profit == Decimal('400.00')

    def test_general_income_is_not_project_income(self, db):
        income = create_income(
            date=date(2026, 5, 1),
            description='Print sale',
            amount=Decimal('80.00'),
        )

        assert income.project_id is None
        assert income.project_income is False

    def test_unknown_project_is_rejected(self, db):
        with pytest.raises(InvalidProjectReferenceError):
            create_income(
                date=date(2026, 5, 1),
                description='Deposit',
                amount=Decimal('400.00'),
                project_id=9999,
            )

        assert not Income.objects.exists()

    def test_non_positive_amount_is_rejected(self, project):
        with pytest.raises(InvalidAmountError):
            create_income(
                date=date(2026, 5, 1),
                description='Nothing',
                amount=Decimal('0.00'),
                project_id=project.id,
            )

    def test_update_amount(self, project):
        income = create_income(
            date=date(2026, 5, 1),
            description='Deposit',
            amount=Decimal('400.00'),
            project_id=project.id,
        )

        update_income(income_id=income.id, data={'amount': Decimal('650.00')})

        assert _refresh(project).received_amt == Decimal('650.00')

    def test_moving_income_recomputes_both_projects(self, project, other_project):
        income = create_income(
            date=date(2026, 5, 1),
            description='Deposit',
            amount=Decimal('400.00'),
            project_id=project.id,
        )

        update_income(income_id=income.id, data={'project_id': other_project.id})

        project = _refresh(project)
        other_project = _refresh(other_project)
        assert project.received_amt == Decimal('0.00')
        assert project.pending_amt == Decimal('1000.00')
        assert other_project.received_amt == Decimal('400.00')
        assert other_project.pending_amt == Decimal('2100.00')
        assert other_project.profit == Decimal('100.00')

    def test_detaching_income_recomputes_old_project(self, project):
        income = create_income(
            date=date(2026, 5, 1),
            description='Deposit',
            amount=Decimal('400.00'),
            project_id=project.id,
        )

        update_income(income_id=income.id, data={'project_id': None})

        assert _refresh(project).received_amt == Decimal('0.00')

    def test_delete_income(self, project):
        income = create_income(
            date=date(2026, 5, 1),
            description='Deposit',
            amount=Decimal('400.00'),
            project_id=project.id,
        )

        delete_income(income_id=income.id)

        assert not Income.objects.exists()
        assert _refresh(project).pending_amt == Decimal('1000.00')

    def test_delete_missing_income(self, db):
        with pytest.raises(IncomeNotFoundError):
            delete_income(income_id=9999)


# =============================================================================
# Expense
# =============================================================================

@pytest.mark.django_db
class TestExpenseService:

    def test_create_expense_reduces_profit(self, other_project):
        expense = create_expense(
            date=date(2026, 5, 3),
            category='Props',
            description='Flowers',
            amount=Decimal('150.00'),
            project_id=other_project.id,
        )

        assert expense.project_expense is True
        project = _refresh(other_project)
        assert project.profit == Decimal('-450.00')
        assert project.pending_amt == Decimal('2500.00')

    def test_update_and_delete_expense(self, other_project):
        expense = create_expense(
            date=date(2026, 5, 3),
            category='Props',
            description='Flowers',
            amount=Decimal('150.00'),
            project_id=other_project.id,
        )

        update_expense(expense_id=expense.id, data={'amount': Decimal('50.00')})
        assert _refresh(other_project).profit == Decimal('-350.00')

        delete_expense(expense_id=expense.id)
        assert _refresh(other_project).profit == Decimal('-300.00')

    def test_categories_are_distinct_and_sorted(self, studio_rent):
        create_expense(date=date(2026, 5, 3), category='Equipment', description='Lens', amount=Decimal('900.00'))
        create_expense(date=date(2026, 5, 4), category='Rent', description='Storage', amount=Decimal('80.00'))

        assert get_expense_categories() == ['Equipment', 'Rent']


# =============================================================================
# Payments
# =============================================================================

@pytest.mark.django_db
class TestPaymentService:

    def test_record_partial_payment(self, project):
        payment = record_project_payment(
            project_id=project.id,
            amount=Decimal('300.00'),
            payment_date=date(2026, 5, 10),
        )

        assert payment.payment_type == PaymentType.PARTIAL
        assert payment.income is not None
        assert payment.income.amount == Decimal('300.00')
        assert payment.income.project_income is True
        assert payment.description == 'Payment for Harbour Gala'

        project = _refresh(project)
        assert project.received_amt == Decimal('300.00')
        assert project.pending_amt == Decimal('700.00')

    def test_record_full_payment(self, project):
        payment = record_project_payment(project_id=project.id, amount=Decimal('1000.00'))

        assert payment.payment_type == PaymentType.FULL
        assert _refresh(project).pending_amt == Decimal('0.00')

    def test_record_payment_for_missing_project(self, db):
        with pytest.raises(ProjectNotFoundError):
            record_project_payment(project_id=9999, amount=Decimal('10.00'))

        assert not Income.objects.exists()

    def test_payment_history(self, project):
        record_project_payment(project_id=project.id, amount=Decimal('300.00'), payment_date=date(2026, 5, 1))
        record_project_payment(project_id=project.id, amount=Decimal('200.00'), payment_date=date(2026, 6, 1))

        history = get_project_payment_history(project.id)

        assert history['project_code'] == project.code
        assert history['total_received'] == Decimal('500.00')
        assert history['total_amount'] == Decimal('1000.00')
        assert history['pending_amount'] == Decimal('500.00')
        assert [p.amount for p in history['payments']] == [Decimal('200.00'), Decimal('300.00')]

    def test_payment_history_empty(self, project):
        history = get_project_payment_history(project.id)

        assert history['payments'] == []
        assert history['total_received'] == Decimal('0.00')
        assert history['pending_amount'] == Decimal('1000.00')

    def test_create_payment_with_unknown_income(self, project):
        with pytest.raises(InvalidIncomeReferenceError):
            create_payment(
                project_id=project.id,
                amount=Decimal('100.00'),
                payment_date=date(2026, 5, 1),
                income_id=9999,
            )

    def test_create_payment_requires_project(self, db):
        with pytest.raises(InvalidProjectReferenceError):
            create_payment(project_id=None, amount=Decimal('100.00'), payment_date=date(2026, 5, 1))

    def test_payments_do_not_change_received_amount(self, project):
        payment = create_payment(
            project_id=project.id,
            amount=Decimal('100.00'),
            payment_date=date(2026, 5, 1),
        )
        assert _refresh(project).received_amt == Decimal('0.00')

        delete_payment(payment_id=payment.id)
        assert not ProjectPayment.objects.exists()

    def test_create_payment_rejects_income_of_another_project(self, project, other_project):
        foreign = record_project_payment(project_id=other_project.id, amount=Decimal('500.00'))

        with pytest.raises(InvalidIncomeReferenceError):
            create_payment(
                project_id=project.id,
                amount=Decimal('100.00'),
                payment_date=date(2026, 5, 1),
                income_id=foreign.income_id,
            )

        assert not project.payments.exists()

    def test_create_payment_rejects_general_income(self, project, workshop_income):
        with pytest.raises(InvalidIncomeReferenceError):
            create_payment(
                project_id=project.id,
                amount=Decimal('100.00'),
                payment_date=date(2026, 5, 1),
                income_id=workshop_income.id,
            )

    def test_moving_payment_keeps_income_on_same_project(self, project, other_project):
        payment = record_project_payment(project_id=project.id, amount=Decimal('300.00'))

        with pytest.raises(InvalidIncomeReferenceError):
            update_payment(payment_id=payment.id, data={'project_id': other_project.id})

        payment = update_payment(
            payment_id=payment.id,
            data={'project_id': other_project.id, 'income_id': None},
        )
        assert payment.project_id == other_project.id
        assert payment.income_id is None

    def test_deleting_income_removes_its_payments(self, project):
        payment = record_project_payment(project_id=project.id, amount=Decimal('300.00'))
        synthetic = ProjectPayment.objects.create(
            project=project,
            income=payment.income,
            amount=Decimal('50.00'),
            payment_date=date(2026, 5, 1),
            is_reconciliation=True,
        )

        delete_income(income_id=payment.income_id)

        assert not ProjectPayment.objects.filter(id=payment.id).exists()
        synthetic.refresh_from_db()
        assert synthetic.income is None
        project = _refresh(project)
        assert project.received_amt == Decimal('0.00')
        assert project.pending_amt == Decimal('1000.00')
