from rest_framework import serializers


class ProjectReconciliationSerializer(serializers.Serializer):
    project_id = serializers.IntegerField()
    project_code = serializers.CharField(allow_null=True)
    issues = serializers.ListField(child=serializers.CharField())
    corrections = serializers.ListField(child=serializers.CharField())
    is_consistent = serializers.BooleanField()
    error = serializers.CharField(allow_null=True)


class ReconciliationReportSerializer(serializers.Serializer):
    run_id = serializers.IntegerField()
    total_projects = serializers.IntegerField()
    consistent_projects = serializers.IntegerField()
    inconsistent_projects = serializers.IntegerField()
    total_issues = serializers.IntegerField()
    total_corrections = serializers.IntegerField()
    errors = serializers.IntegerField()
    details = ProjectReconciliationSerializer(many=True)


class ConsistencyFindingSerializer(serializers.Serializer):
    check = serializers.CharField()
    count = serializers.IntegerField()
    record_ids = serializers.ListField(child=serializers.IntegerField())
    recommendation = serializers.CharField()


class ConsistencyReportSerializer(serializers.Serializer):
    is_valid = serializers.BooleanField()
    issues = serializers.ListField(child=serializers.CharField())
    recommendations = serializers.ListField(child=serializers.CharField())
    findings = ConsistencyFindingSerializer(many=True)


class CorrectionReportSerializer(serializers.Serializer):
    corrections_applied = serializers.IntegerField()
    errors = serializers.IntegerField()
    details = serializers.ListField(child=serializers.CharField())


class ReconciliationStatsSerializer(serializers.Serializer):
    total_projects = serializers.IntegerField()
    total_runs = serializers.IntegerField()
    last_reconciliation = serializers.DateTimeField(allow_null=True)
    consistent_projects = serializers.IntegerField()
    inconsistent_projects = serializers.IntegerField()
    total_issues = serializers.IntegerField()
    total_corrections = serializers.IntegerField()
    errors = serializers.IntegerField()


class AuditEntryInputSerializer(serializers.Serializer):
    operation = serializers.CharField(max_length=100)
    details = serializers.JSONField(required=False, default=dict)


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
