from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema
from apps.accounts.permissions import IsAdminRole
from .serializers import (
    ReconciliationReportSerializer,
    ConsistencyReportSerializer,
    CorrectionReportSerializer,
    ReconciliationStatsSerializer,
    AuditEntryInputSerializer,
    MessageResponseSerializer,
)
from .services import (
    reconcile_all,
    validate_consistency,
    perform_automated_corrections,
    get_reconciliation_stats,
    record_audit_entry,
)


@extend_schema(
    request=None,
    responses={200: ReconciliationReportSerializer},
    description="Recompute every project's financials, correct drift and back-fill payment history.",
    tags=['reconciliation'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def reconcile(request):
    """Run the reconciliation sweep."""
    report = reconcile_all(triggered_by=request.user)
    return Response(ReconciliationReportSerializer(report).data)


@extend_schema(
    responses={200: ConsistencyReportSerializer},
    description="Read-only consistency check with remediation advice.",
    tags=['reconciliation'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def validate(request):
    """Report consistency problems without changing data."""
    return Response(ConsistencyReportSerializer(validate_consistency()).data)


@extend_schema(
    request=None,
    responses={200: CorrectionReportSerializer},
    description="Detach orphaned income/expense rows and clamp negative pending amounts.",
    tags=['reconciliation'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def correct(request):
    """Apply safe automated corrections."""
    result = perform_automated_corrections()
    record_audit_entry(operation='automated_corrections', details=result, user=request.user)
    return Response(CorrectionReportSerializer(result).data)


@extend_schema(
    responses={200: ReconciliationStatsSerializer},
    tags=['reconciliation'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def stats(request):
    """Get project count and the latest reconciliation summary."""
    return Response(ReconciliationStatsSerializer(get_reconciliation_stats()).data)


@extend_schema(
    request=AuditEntryInputSerializer,
    responses={201: MessageResponseSerializer},
    tags=['reconciliation'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def audit(request):
    """Record a financial audit trail entry."""
    serializer = AuditEntryInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    record_audit_entry(
        operation=serializer.validated_data['operation'],
        details=serializer.validated_data['details'],
        user=request.user,
    )
    return Response(
        {'message': 'Audit entry recorded'},
        status=status.HTTP_201_CREATED
    )
