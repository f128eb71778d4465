"""
Serializers for budget app.

Input Serializers:
    DateRangeQuerySerializer - Validates optional start_date/end_date
    MonthsQuerySerializer - Validates the monthly series length

Response Serializers:
    BudgetOverviewSerializer - Balance, month income, chart and split-up
    BudgetCategorySerializer - One expense category with share and colour
    FinancialSummarySerializer - Period income/expense totals
    MonthlyTotalsSerializer - One month of income and expense
    CategorizedTotalsSerializer - Category totals with grand total
    ProjectSummariesSerializer - Per-project financials with totals
    DashboardStatsSerializer - Headline numbers
"""

from rest_framework import serializers


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class DateRangeQuerySerializer(serializers.Serializer):
    """
    Validate an optional date range.

    Used by: financial_summary, expense_totals
    """

    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        start_date = attrs.get('start_date')
        end_date = attrs.get('end_date')
        if start_date and end_date and start_date > end_date:
            raise serializers.ValidationError({
                'end_date': 'end_date must be on or after start_date'
            })
        return attrs


class MonthsQuerySerializer(serializers.Serializer):
    """Number of months for the monthly series (1-24, default 6)."""

    months = serializers.IntegerField(
        required=False,
        default=6,
        min_value=1,
        max_value=24,
    )


# =============================================================================
# Response Serializers (API Documentation)
# =============================================================================

class ChartPointSerializer(serializers.Serializer):
    month = serializers.CharField()
    year = serializers.IntegerField()
    value = serializers.DecimalField(max_digits=14, decimal_places=2)


class SplitUpItemSerializer(serializers.Serializer):
    name = serializers.CharField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    color = serializers.CharField()


class BudgetOverviewSerializer(serializers.Serializer):
    current_balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    received_this_month = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_received_chart = ChartPointSerializer(many=True)
    budget_split_up = SplitUpItemSerializer(many=True)


class BudgetCategorySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    count = serializers.IntegerField()
    percentage = serializers.IntegerField()
    color = serializers.CharField()


class FinancialSummarySerializer(serializers.Serializer):
    total_income = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_expenses = serializers.DecimalField(max_digits=14, decimal_places=2)
    net_profit = serializers.DecimalField(max_digits=14, decimal_places=2)
    project_income = serializers.DecimalField(max_digits=14, decimal_places=2)
    non_project_income = serializers.DecimalField(max_digits=14, decimal_places=2)
    project_expenses = serializers.DecimalField(max_digits=14, decimal_places=2)
    non_project_expenses = serializers.DecimalField(max_digits=14, decimal_places=2)
    income_count = serializers.IntegerField()
    expense_count = serializers.IntegerField()
    period_start = serializers.DateField(allow_null=True)
    period_end = serializers.DateField(allow_null=True)


class MonthlyTotalsSerializer(serializers.Serializer):
    month = serializers.CharField(help_text='YYYY-MM')
    label = serializers.CharField()
    income = serializers.DecimalField(max_digits=14, decimal_places=2)
    expense = serializers.DecimalField(max_digits=14, decimal_places=2)
    net = serializers.DecimalField(max_digits=14, decimal_places=2)


class CategoryTotalSerializer(serializers.Serializer):
    category = serializers.CharField()
    total = serializers.DecimalField(max_digits=14, decimal_places=2)
    count = serializers.IntegerField()


class CategorizedTotalsSerializer(serializers.Serializer):
    categories = CategoryTotalSerializer(many=True)
    grand_total = serializers.DecimalField(max_digits=14, decimal_places=2)


class ProjectFinancialRowSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    code = serializers.CharField(allow_null=True)
    name = serializers.CharField()
    status = serializers.CharField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    received_amt = serializers.DecimalField(max_digits=12, decimal_places=2)
    pending_amt = serializers.DecimalField(max_digits=12, decimal_places=2)
    profit = serializers.DecimalField(max_digits=12, decimal_places=2)


class PortfolioTotalsSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    received_amt = serializers.DecimalField(max_digits=14, decimal_places=2)
    pending_amt = serializers.DecimalField(max_digits=14, decimal_places=2)
    profit = serializers.DecimalField(max_digits=14, decimal_places=2)


class ProjectSummariesSerializer(serializers.Serializer):
    projects = ProjectFinancialRowSerializer(many=True)
    totals = PortfolioTotalsSerializer()


class DashboardStatsSerializer(serializers.Serializer):
    total_projects = serializers.IntegerField()
    total_clients = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_profit = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_pending = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_income = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_expenses = serializers.DecimalField(max_digits=14, decimal_places=2)


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
