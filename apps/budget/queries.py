"""
Budget Queries Module
=====================

Read-only aggregations behind the budget screen and the dashboard.

Classes:
    BudgetQueries: Static methods summarising income, expenses and projects.

Example:
    Dashboard numbers::

        from apps.budget.queries import BudgetQueries

        stats = BudgetQueries.dashboard_stats()
        print(f"{stats['total_projects']} projects, {stats['total_pending']} pending")

Note:
    Nothing here writes to the database. Every method tolerates empty tables
    and returns zero-valued structures instead of failing.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from django.db.models import Count, Sum
from django.db.models.functions import TruncMonth
from django.utils import timezone

from apps.clients.models import Client
from apps.finances.models import Income, Expense
from apps.projects.models import Project

ZERO = Decimal('0.00')

CATEGORY_COLORS = [
    '#4CAF50', '#2196F3', '#FF9800', '#F44336',
    '#9C27B0', '#00BCD4', '#FFEB3B', '#795548',
]


def _month_start(day: date, months_back: int = 0) -> date:
    """First day of the month ``months_back`` months before ``day``."""
    month_index = day.year * 12 + (day.month - 1) - months_back
    return date(month_index // 12, month_index % 12 + 1, 1)


def _date_filter(start_date=None, end_date=None):
    filters = {}
    if start_date:
        filters['date__gte'] = start_date
    if end_date:
        filters['date__lte'] = end_date
    return filters


def _monthly_totals(model, since: date):
    """Map of (year, month) -> summed amount for rows dated on/after ``since``."""
    rows = (
        model.objects
        .filter(date__gte=since)
        .annotate(month=TruncMonth('date'))
        .order_by()
        .values('month')
        .annotate(total=Sum('amount'))
    )
    return {(row['month'].year, row['month'].month): row['total'] or ZERO for row in rows}


class BudgetQueries:
    """
    Aggregations for budget and dashboard endpoints.

    Methods:
        budget_overview: Balance, this month's income, 12-month chart, split-up.
        budget_categories: Expense totals per category with share and colour.
        financial_summary: Income/expense totals, project vs. non-project.
        monthly_income_expense: Per-month income and expense for the last N months.
        categorized_expense_totals: Category totals sorted by size.
        project_financial_summaries: Per-project financials plus portfolio totals.
        dashboard_stats: Headline numbers.

    Note:
        All methods return plain dictionaries or lists suitable for JSON
        responses.
    """

    @staticmethod
    def budget_overview(today=None):
        """
        Budget screen overview.

        Args:
            today (date, optional): Reference day. Defaults to the local date.

        Returns:
            dict: current_balance (all income minus all expenses),
            received_this_month, total_received_chart (12 months, oldest
            first, each ``{'month': 'JAN', 'year': 2026, 'value': ...}``) and
            budget_split_up (expense categories with amount and colour).
        """
        today = today or timezone.localdate()

        total_income = Income.objects.aggregate(total=Sum('amount'))['total'] or ZERO
        total_expenses = Expense.objects.aggregate(total=Sum('amount'))['total'] or ZERO
        received_this_month = (
            Income.objects
            .filter(date__gte=_month_start(today), date__lte=today)
            .aggregate(total=Sum('amount'))['total'] or ZERO
        )

        first_month = _month_start(today, 11)
        monthly = _monthly_totals(Income, first_month)
        chart = []
        for months_back in range(11, -1, -1):
            month = _month_start(today, months_back)
            chart.append({
                'month': month.strftime('%b').upper(),
                'year': month.year,
                'value': monthly.get((month.year, month.month), ZERO),
            })

        split_up = [
            {'name': c['name'], 'amount': c['amount'], 'color': c['color']}
            for c in BudgetQueries.budget_categories()
        ]

        return {
            'current_balance': total_income - total_expenses,
            'received_this_month': received_this_month,
            'total_received_chart': chart,
            'budget_split_up': split_up,
        }

    @staticmethod
    def budget_categories():
        """
        Expense totals per category.

        Returns:
            list[dict]: id, name, amount, count, percentage (integer share of
            all expenses, rounded half up) and color, largest first.
        """
        rows = (
            Expense.objects
            .order_by()
            .values('category')
            .annotate(amount=Sum('amount'), count=Count('id'))
            .order_by('-amount', 'category')
        )
        rows = list(rows)
        grand_total = sum((row['amount'] or ZERO for row in rows), ZERO)

        categories = []
        for index, row in enumerate(rows):
            amount = row['amount'] or ZERO
            percentage = 0
            if grand_total > 0:
                percentage = int((amount / grand_total * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP))
            categories.append({
                'id': index + 1,
                'name': row['category'],
                'amount': amount,
                'count': row['count'],
                'percentage': percentage,
                'color': CATEGORY_COLORS[index % len(CATEGORY_COLORS)],
            })
        return categories

    @staticmethod
    def financial_summary(start_date=None, end_date=None):
        """Income and expense totals for a period, split by project attribution."""
        filters = _date_filter(start_date, end_date)
        incomes = Income.objects.filter(**filters)
        expenses = Expense.objects.filter(**filters)

        income_stats = incomes.aggregate(total=Sum('amount'), count=Count('id'))
        expense_stats = expenses.aggregate(total=Sum('amount'), count=Count('id'))
        project_income = incomes.filter(project_income=True).aggregate(total=Sum('amount'))['total'] or ZERO
        project_expenses = expenses.filter(project_expense=True).aggregate(total=Sum('amount'))['total'] or ZERO

        total_income = income_stats['total'] or ZERO
        total_expenses = expense_stats['total'] or ZERO

        return {
            'total_income': total_income,
            'total_expenses': total_expenses,
            'net_profit': total_income - total_expenses,
            'project_income': project_income,
            'non_project_income': total_income - project_income,
            'project_expenses': project_expenses,
            'non_project_expenses': total_expenses - project_expenses,
            'income_count': income_stats['count'],
            'expense_count': expense_stats['count'],
            'period_start': start_date,
            'period_end': end_date,
        }

    @staticmethod
    def monthly_income_expense(months=6, today=None):
        """
        Income and expense per month for the last ``months`` months.

        Returns:
            list[dict]: Oldest month first; each entry has month
            (``YYYY-MM``), label (``Jan 2026``), income, expense and net.
            Months without rows are present with zeros.
        """
        today = today or timezone.localdate()
        since = _month_start(today, months - 1)
        income = _monthly_totals(Income, since)
        expense = _monthly_totals(Expense, since)

        series = []
        for months_back in range(months - 1, -1, -1):
            month = _month_start(today, months_back)
            key = (month.year, month.month)
            month_income = income.get(key, ZERO)
            month_expense = expense.get(key, ZERO)
            series.append({
                'month': month.strftime('%Y-%m'),
                'label': month.strftime('%b %Y'),
                'income': month_income,
                'expense': month_expense,
                'net': month_income - month_expense,
            })
        return series

    @staticmethod
    def categorized_expense_totals(start_date=None, end_date=None):
        """Expense total and count per category, largest first, with a grand total."""
        rows = (
            Expense.objects
            .filter(**_date_filter(start_date, end_date))
            .order_by()
            .values('category')
            .annotate(total=Sum('amount'), count=Count('id'))
            .order_by('-total', 'category')
        )
        categories = [
            {'category': row['category'], 'total': row['total'] or ZERO, 'count': row['count']}
            for row in rows
        ]
        return {
            'categories': categories,
            'grand_total': sum((c['total'] for c in categories), ZERO),
        }

    @staticmethod
    def project_financial_summaries():
        """Stored financials of every project plus portfolio totals."""
        projects = list(
            Project.objects
            .order_by('-created_at')
            .values('id', 'code', 'name', 'status', 'amount', 'received_amt', 'pending_amt', 'profit')
        )
        totals = {
            field: sum((p[field] for p in projects), ZERO)
            for field in ('amount', 'received_amt', 'pending_amt', 'profit')
        }
        return {
            'projects': projects,
            'totals': totals,
        }

    @staticmethod
    def dashboard_stats():
        """Headline numbers for the dashboard."""
        project_totals = Project.objects.aggregate(
            total_projects=Count('id'),
            total_revenue=Sum('amount'),
            total_profit=Sum('profit'),
            total_pending=Sum('pending_amt'),
        )
        total_income = Income.objects.aggregate(total=Sum('amount'))['total'] or ZERO
        total_expenses = Expense.objects.aggregate(total=Sum('amount'))['total'] or ZERO

        return {
            'total_projects': project_totals['total_projects'],
            'total_clients': Client.objects.count(),
            'total_revenue': project_totals['total_revenue'] or ZERO,
            'total_profit': project_totals['total_profit'] or ZERO,
            'total_pending': project_totals['total_pending'] or ZERO,
            'total_income': total_income,
            'total_expenses': total_expenses,
        }
