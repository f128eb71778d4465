from decimal import Decimal
from rest_framework import serializers
from apps.clients.models import Client
from .models import Project, ProjectStatus


class ProjectSerializer(serializers.ModelSerializer):
    """Full project representation including derived financials."""

    client_name = serializers.CharField(source='client.name', read_only=True, default=None)
    payment_status = serializers.CharField(read_only=True)

    class Meta:
        model = Project
        fields = [
            'id',
            'code',
            'name',
            'company',
            'type',
            'status',
            'payment_status',
            'shoot_start_date',
            'shoot_end_date',
            'location',
            'address',
            'reference',
            'client',
            'client_name',
            'amount',
            'outsourcing',
            'outsourcing_amt',
            'out_for',
            'out_client',
            'outsourcing_paid',
            'received_amt',
            'pending_amt',
            'profit',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ProjectListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    client_name = serializers.CharField(source='client.name', read_only=True, default=None)

    class Meta:
        model = Project
        fields = [
            'id',
            'code',
            'name',
            'company',
            'type',
            'status',
            'client',
            'client_name',
            'shoot_start_date',
            'amount',
            'received_amt',
            'pending_amt',
            'profit',
        ]
        read_only_fields = fields


class ProjectInputSerializer(serializers.Serializer):
    """Validate project create/update input."""

    name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    company = serializers.CharField(max_length=200, required=False, allow_blank=True)
    type = serializers.CharField(max_length=100, required=False, allow_blank=True)
    status = serializers.CharField(max_length=20, required=False)
    shoot_start_date = serializers.DateField(required=False, allow_null=True)
    shoot_end_date = serializers.DateField(required=False, allow_null=True)
    location = serializers.CharField(max_length=255, required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)
    reference = serializers.CharField(required=False, allow_blank=True)
    client = serializers.PrimaryKeyRelatedField(
        queryset=Client.objects.all(),
        required=False,
        allow_null=True
    )
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.00'))
    outsourcing = serializers.BooleanField(required=False)
    outsourcing_amt = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0.00'),
        required=False
    )
    out_for = serializers.CharField(max_length=200, required=False, allow_blank=True)
    out_client = serializers.CharField(max_length=200, required=False, allow_blank=True)
    outsourcing_paid = serializers.BooleanField(required=False)

    def validate_status(self, value):
        value = value.strip().upper()
        if value not in ProjectStatus.values:
            raise serializers.ValidationError(
                f"Invalid status. Choose from: {', '.join(ProjectStatus.values)}"
            )
        return value

    def validate(self, attrs):
        start = attrs.get('shoot_start_date')
        end = attrs.get('shoot_end_date')
        if self.instance is not None:
            start = attrs.get('shoot_start_date', self.instance.shoot_start_date)
            end = attrs.get('shoot_end_date', self.instance.shoot_end_date)
        if start and end and end < start:
            raise serializers.ValidationError({
                'shoot_end_date': 'Shoot end date cannot be before start date.'
            })
        return attrs


class ProjectCodeSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    code = serializers.CharField()
    name = serializers.CharField()


class ProjectPaymentStatusSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    code = serializers.CharField()
    name = serializers.CharField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    pending_amt = serializers.DecimalField(max_digits=12, decimal_places=2)
    status = serializers.CharField()
    client_name = serializers.CharField()
    client_initial = serializers.CharField()
    updated_at = serializers.DateTimeField()


class StatusCountSerializer(serializers.Serializer):
    status = serializers.CharField()
    count = serializers.IntegerField()


class TypeCountSerializer(serializers.Serializer):
    type = serializers.CharField()
    count = serializers.IntegerField()


class ProjectStatsSerializer(serializers.Serializer):
    total_projects = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_profit = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_pending = serializers.DecimalField(max_digits=14, decimal_places=2)
    average_project_value = serializers.DecimalField(max_digits=14, decimal_places=2)
    status_breakdown = StatusCountSerializer(many=True)
    type_breakdown = TypeCountSerializer(many=True)


class ProjectFilterSerializer(serializers.Serializer):
    """Validate list query parameters."""

    search = serializers.CharField(required=False, allow_blank=True)
    type = serializers.CharField(required=False, allow_blank=True)
    status = serializers.CharField(required=False, allow_blank=True)
    company = serializers.CharField(required=False, allow_blank=True)
    client = serializers.IntegerField(required=False, min_value=1)


class ProjectDeleteParamsSerializer(serializers.Serializer):
    force = serializers.BooleanField(required=False, default=False)


# =============================================================================
# Completion
# =============================================================================

class CompletionCheckSerializer(serializers.Serializer):
    project_id = serializers.IntegerField()
    project_code = serializers.CharField(allow_null=True)
    status = serializers.CharField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    received_amt = serializers.DecimalField(max_digits=12, decimal_places=2)
    shoot_end_date = serializers.DateField(allow_null=True)
    fully_paid = serializers.BooleanField()
    shoot_ended_with_partial_payment = serializers.BooleanField()
    should_complete = serializers.BooleanField()
    reason = serializers.CharField()


class MarkCompleteSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=255)
    admin_override = serializers.BooleanField(required=False, default=False)


class AutoCompletionDetailSerializer(serializers.Serializer):
    project_id = serializers.IntegerField()
    project_code = serializers.CharField(allow_null=True)
    reason = serializers.CharField()
    success = serializers.BooleanField()


class AutoCompletionResultSerializer(serializers.Serializer):
    checked = serializers.IntegerField()
    completed = serializers.IntegerField()
    errors = serializers.IntegerField()
    dry_run = serializers.BooleanField()
    details = AutoCompletionDetailSerializer(many=True)


class AutoCompletionParamsSerializer(serializers.Serializer):
    dry_run = serializers.BooleanField(required=False, default=False)


class CompletionStatsSerializer(serializers.Serializer):
    total_projects = serializers.IntegerField()
    completed_projects = serializers.IntegerField()
    open_projects = serializers.IntegerField()
    cancelled_projects = serializers.IntegerField()
    completed_this_month = serializers.IntegerField()
