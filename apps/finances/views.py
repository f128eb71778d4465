from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema
from apps.accounts.permissions import IsManagerOrReadOnly
from apps.projects.models import Project
from .models import ProjectPayment
from .serializers import (
    IncomeSerializer,
    IncomeInputSerializer,
    ExpenseSerializer,
    ExpenseInputSerializer,
    ProjectPaymentSerializer,
    ProjectPaymentInputSerializer,
    RecordPaymentInputSerializer,
    PaymentHistorySerializer,
    FinanceFilterSerializer,
)
from .services import (
    create_income,
    update_income,
    delete_income,
    get_income_by_id,
    search_incomes,
    create_expense,
    update_expense,
    delete_expense,
    get_expense_by_id,
    search_expenses,
    get_expense_categories,
    create_payment,
    update_payment,
    delete_payment,
    get_payment_by_id,
    record_project_payment,
    get_project_payment_history,
)


class FinancePagination(PageNumberPagination):
    """Custom pagination for financial records."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class FinanceViewSetMixin:
    """Shared configuration for income and expense ViewSets."""

    permission_classes = [IsAuthenticated, IsManagerOrReadOnly]
    pagination_class = FinancePagination
    lookup_value_regex = r'\d+'

    def get_filter_params(self):
        filter_serializer = FinanceFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        return filter_serializer.validated_data

    def get_serializer_context(self):
        context = super().get_serializer_context()
        if self.action == 'list':
            context['project_codes'] = dict(Project.objects.values_list('id', 'code'))
        return context


class IncomeViewSet(FinanceViewSetMixin, viewsets.ModelViewSet):
    """
    ViewSet for income entries.

    Every mutation recomputes the financials of the affected project(s).
    """

    serializer_class = IncomeSerializer

    def get_queryset(self):
        params = self.get_filter_params()
        return search_incomes(
            search=params.get('search'),
            project_id=params.get('project'),
            start_date=params.get('start_date'),
            end_date=params.get('end_date'),
        )

    @extend_schema(request=IncomeInputSerializer, responses={201: IncomeSerializer})
    def create(self, request, *args, **kwargs):
        serializer = IncomeInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        income = create_income(**serializer.validated_data)

        return Response(IncomeSerializer(income).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=IncomeInputSerializer, responses={200: IncomeSerializer})
    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        get_income_by_id(kwargs['pk'])
        serializer = IncomeInputSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        income = update_income(income_id=kwargs['pk'], data=serializer.validated_data)

        return Response(IncomeSerializer(income).data)

    def destroy(self, request, *args, **kwargs):
        delete_income(income_id=kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)


class ExpenseViewSet(FinanceViewSetMixin, viewsets.ModelViewSet):
    """
    ViewSet for expense entries.

    Every mutation recomputes the financials of the affected project(s).
    """

    serializer_class = ExpenseSerializer

    def get_queryset(self):
        params = self.get_filter_params()
        return search_expenses(
            search=params.get('search'),
            project_id=params.get('project'),
            category=params.get('category'),
            start_date=params.get('start_date'),
            end_date=params.get('end_date'),
        )

    @extend_schema(request=ExpenseInputSerializer, responses={201: ExpenseSerializer})
    def create(self, request, *args, **kwargs):
        serializer = ExpenseInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        expense = create_expense(**serializer.validated_data)

        return Response(ExpenseSerializer(expense).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ExpenseInputSerializer, responses={200: ExpenseSerializer})
    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        get_expense_by_id(kwargs['pk'])
        serializer = ExpenseInputSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        expense = update_expense(expense_id=kwargs['pk'], data=serializer.validated_data)

        return Response(ExpenseSerializer(expense).data)

    def destroy(self, request, *args, **kwargs):
        delete_expense(expense_id=kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: {'type': 'array', 'items': {'type': 'string'}}})
    @action(detail=False, methods=['get'])
    def categories(self, request):
        """Get the distinct expense categories."""
        return Response(get_expense_categories())


class ProjectPaymentViewSet(viewsets.ModelViewSet):
    """
    ViewSet for project payments.

    list: Get payments (?project= filters by project)
    """

    serializer_class = ProjectPaymentSerializer
    permission_classes = [IsAuthenticated, IsManagerOrReadOnly]
    pagination_class = FinancePagination
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        queryset = ProjectPayment.objects.select_related('project')
        project_id = self.request.query_params.get('project')
        if project_id and project_id.isdigit():
            queryset = queryset.filter(project_id=project_id)
        return queryset

    @extend_schema(request=ProjectPaymentInputSerializer, responses={201: ProjectPaymentSerializer})
    def create(self, request, *args, **kwargs):
        serializer = ProjectPaymentInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        payment = create_payment(**serializer.validated_data)

        return Response(ProjectPaymentSerializer(payment).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ProjectPaymentInputSerializer, responses={200: ProjectPaymentSerializer})
    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        get_payment_by_id(kwargs['pk'])
        serializer = ProjectPaymentInputSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        payment = update_payment(payment_id=kwargs['pk'], data=serializer.validated_data)

        return Response(ProjectPaymentSerializer(payment).data)

    def destroy(self, request, *args, **kwargs):
        delete_payment(payment_id=kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    methods=['GET'],
    responses={200: PaymentHistorySerializer},
    description="Get the payment history of a project.",
)
@extend_schema(
    methods=['POST'],
    request=RecordPaymentInputSerializer,
    responses={201: ProjectPaymentSerializer},
    description="Record money received for a project (creates income and payment).",
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsManagerOrReadOnly])
def project_payments(request, project_id):
    """Payment history of a project, or record a new payment for it."""
    if request.method == 'GET':
        history = get_project_payment_history(project_id)
        return Response(PaymentHistorySerializer(history).data)

    serializer = RecordPaymentInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    payment = record_project_payment(project_id=project_id, **serializer.validated_data)

    return Response(
        ProjectPaymentSerializer(payment).data,
        status=status.HTTP_201_CREATED
    )
