from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from apps.accounts.permissions import IsAdminRole, IsManagerOrAdmin, IsManagerOrReadOnly
from apps.reconciliation.services import record_audit_entry
from .serializers import (
    ProjectSerializer,
    ProjectListSerializer,
    ProjectInputSerializer,
    ProjectCodeSerializer,
    ProjectPaymentStatusSerializer,
    ProjectStatsSerializer,
    ProjectFilterSerializer,
    ProjectDeleteParamsSerializer,
    CompletionCheckSerializer,
    MarkCompleteSerializer,
    AutoCompletionParamsSerializer,
    AutoCompletionResultSerializer,
    CompletionStatsSerializer,
)
from .services import (
    create_project,
    update_project,
    delete_project,
    get_project_by_id,
    get_project_by_code,
    search_projects,
    get_project_codes,
    get_projects_by_payment_status,
    get_project_stats,
    recompute_project_financials,
    check_completion_criteria,
    mark_project_complete,
    auto_complete_projects,
    get_completion_stats,
)


class ProjectPagination(PageNumberPagination):
    """Custom pagination for projects."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class ProjectViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Project CRUD operations.

    list: Get all projects (filterable by search/type/status/company/client)
    create: Create a new project (code and financials are assigned)
    retrieve: Get a specific project
    update: Update a project (financials are recomputed)
    destroy: Delete a project (?force=true to cascade financial rows)
    """

    serializer_class = ProjectSerializer
    permission_classes = [IsAuthenticated, IsManagerOrReadOnly]
    pagination_class = ProjectPagination
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        filter_serializer = ProjectFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return search_projects(
            search=params.get('search'),
            type=params.get('type'),
            status=params.get('status'),
            company=params.get('company'),
            client_id=params.get('client'),
        )

    def get_serializer_class(self):
        if self.action == 'list':
            return ProjectListSerializer
        if self.action in ['create', 'update', 'partial_update']:
            return ProjectInputSerializer
        return ProjectSerializer

    @extend_schema(request=ProjectInputSerializer, responses={201: ProjectSerializer})
    def create(self, request, *args, **kwargs):
        serializer = ProjectInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        project = create_project(**serializer.validated_data)

        return Response(
            ProjectSerializer(project).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(request=ProjectInputSerializer, responses={200: ProjectSerializer})
    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        project = get_project_by_id(kwargs['pk'])
        serializer = ProjectInputSerializer(project, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        project = update_project(project_id=project.id, data=serializer.validated_data)

        return Response(ProjectSerializer(project).data)

    @extend_schema(parameters=[
        OpenApiParameter('force', bool, description='Also delete the project income and expense rows'),
    ])
    def destroy(self, request, *args, **kwargs):
        params = ProjectDeleteParamsSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)

        delete_project(project_id=kwargs['pk'], force=params.validated_data['force'])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: ProjectCodeSerializer(many=True)})
    @action(detail=False, methods=['get'])
    def codes(self, request):
        """Get code and name of every project."""
        return Response(ProjectCodeSerializer(get_project_codes(), many=True).data)

    @extend_schema(responses={200: ProjectStatsSerializer})
    @action(detail=False, methods=['get'])
    def stats(self, request):
        """Get portfolio statistics."""
        return Response(ProjectStatsSerializer(get_project_stats()).data)

    @extend_schema(responses={200: ProjectPaymentStatusSerializer(many=True)})
    @action(
        detail=False,
        methods=['get'],
        url_path=r'by-status/(?P<payment_status>[^/.]+)',
        url_name='by-status',
    )
    def by_status(self, request, payment_status=None):
        """Get projects in an ongoing/pending/completed payment bucket."""
        projects = get_projects_by_payment_status(payment_status)
        return Response(ProjectPaymentStatusSerializer(projects, many=True).data)

    @extend_schema(responses={200: ProjectSerializer})
    @action(
        detail=False,
        methods=['get'],
        url_path=r'code/(?P<code>[^/]+)',
        url_name='by-code',
    )
    def by_code(self, request, code=None):
        """Get a project by its code."""
        return Response(ProjectSerializer(get_project_by_code(code)).data)

    @extend_schema(request=None, responses={200: ProjectSerializer})
    @action(detail=True, methods=['post'], permission_classes=[IsAuthenticated, IsManagerOrAdmin])
    def recompute(self, request, pk=None):
        """Recompute derived financials from the project's child rows."""
        get_project_by_id(pk)
        project = recompute_project_financials(project_id=pk)
        return Response(ProjectSerializer(project).data)

    @extend_schema(responses={200: CompletionStatsSerializer})
    @action(detail=False, methods=['get'])
    def completion(self, request):
        """Get project counts by completion."""
        return Response(CompletionStatsSerializer(get_completion_stats()).data)

    @extend_schema(request=AutoCompletionParamsSerializer, responses={200: AutoCompletionResultSerializer})
    @action(
        detail=False,
        methods=['post'],
        url_path='completion/run',
        url_name='completion-run',
        permission_classes=[IsAuthenticated, IsAdminRole],
    )
    def run_completion(self, request):
        """Complete every open project that meets the completion criteria."""
        params = AutoCompletionParamsSerializer(data=request.data)
        params.is_valid(raise_exception=True)

        result = auto_complete_projects(dry_run=params.validated_data['dry_run'])
        if not result['dry_run']:
            record_audit_entry(operation='auto_complete_projects', details=result, user=request.user)
        return Response(AutoCompletionResultSerializer(result).data)

    @extend_schema(responses={200: CompletionCheckSerializer})
    @action(
        detail=True,
        methods=['get'],
        url_path='completion',
        url_name='completion-check',
        permission_classes=[IsAuthenticated, IsManagerOrAdmin],
    )
    def completion_check(self, request, pk=None):
        """Evaluate the completion criteria of one project."""
        check = check_completion_criteria(pk)
        return Response(CompletionCheckSerializer(check.as_dict()).data)

    @extend_schema(request=MarkCompleteSerializer, responses={200: ProjectSerializer})
    @action(detail=True, methods=['post'], permission_classes=[IsAuthenticated, IsAdminRole])
    def complete(self, request, pk=None):
        """Mark a project as completed."""
        serializer = MarkCompleteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        project = mark_project_complete(project_id=pk, **serializer.validated_data)
        record_audit_entry(
            operation='mark_project_complete',
            details={'project_id': project.id, 'project_code': project.code, **serializer.validated_data},
            user=request.user,
        )
        return Response(ProjectSerializer(project).data)
