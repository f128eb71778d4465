from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from .queries import BudgetQueries
from .serializers import (
    # Input serializers
    DateRangeQuerySerializer,
    MonthsQuerySerializer,
    # Response serializers
    BudgetOverviewSerializer,
    BudgetCategorySerializer,
    FinancialSummarySerializer,
    MonthlyTotalsSerializer,
    CategorizedTotalsSerializer,
    ProjectSummariesSerializer,
    DashboardStatsSerializer,
    ErrorSerializer,
)

DATE_RANGE_PARAMETERS = [
    OpenApiParameter('start_date', OpenApiTypes.DATE, description='Start date (YYYY-MM-DD)'),
    OpenApiParameter('end_date', OpenApiTypes.DATE, description='End date (YYYY-MM-DD)'),
]


@extend_schema(
    responses={200: BudgetOverviewSerializer},
    description="Current balance, this month's income, 12-month income chart and expense split-up.",
    tags=['budget'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def budget_overview(request):
    """Budget screen overview."""
    return Response(BudgetOverviewSerializer(BudgetQueries.budget_overview()).data)


@extend_schema(
    responses={200: BudgetCategorySerializer(many=True)},
    description="Expense totals per category with percentage share and chart colour.",
    tags=['budget'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def budget_categories(request):
    return Response(BudgetCategorySerializer(BudgetQueries.budget_categories(), many=True).data)


@extend_schema(
    parameters=DATE_RANGE_PARAMETERS,
    responses={
        200: FinancialSummarySerializer,
        400: ErrorSerializer,
    },
    description="Income and expense totals for a period, split by project attribution.",
    tags=['budget'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def financial_summary(request):
    """Financial summary - thin HTTP handler."""
    query_serializer = DateRangeQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    data = BudgetQueries.financial_summary(
        start_date=params.get('start_date'),
        end_date=params.get('end_date'),
    )
    return Response(FinancialSummarySerializer(data).data)


@extend_schema(
    parameters=[
        OpenApiParameter('months', OpenApiTypes.INT, description='Number of months (1-24, default 6)'),
    ],
    responses={
        200: MonthlyTotalsSerializer(many=True),
        400: ErrorSerializer,
    },
    description="Income and expense per month, oldest month first.",
    tags=['budget'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def monthly_income_expense(request):
    query_serializer = MonthsQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    data = BudgetQueries.monthly_income_expense(months=query_serializer.validated_data['months'])
    return Response(MonthlyTotalsSerializer(data, many=True).data)


@extend_schema(
    parameters=DATE_RANGE_PARAMETERS,
    responses={
        200: CategorizedTotalsSerializer,
        400: ErrorSerializer,
    },
    description="Expense totals per category, largest first.",
    tags=['budget'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def expense_totals(request):
    query_serializer = DateRangeQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    data = BudgetQueries.categorized_expense_totals(
        start_date=params.get('start_date'),
        end_date=params.get('end_date'),
    )
    return Response(CategorizedTotalsSerializer(data).data)


@extend_schema(
    responses={200: ProjectSummariesSerializer},
    description="Stored financials of every project with portfolio totals.",
    tags=['budget'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def project_summaries(request):
    return Response(ProjectSummariesSerializer(BudgetQueries.project_financial_summaries()).data)


@extend_schema(
    responses={200: DashboardStatsSerializer},
    description="Headline numbers for the dashboard.",
    tags=['budget'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard(request):
    """Dashboard stats."""
    return Response(DashboardStatsSerializer(BudgetQueries.dashboard_stats()).data)
