from decimal import Decimal
from rest_framework import serializers
from apps.projects.models import Project
from .models import Income, Expense, ProjectPayment, PaymentType

MIN_AMOUNT = Decimal('0.01')


class ProjectCodeMixin:
    """
    Resolve the referenced project's code.

    Orphaned rows keep a project id without a project, so the code is looked
    up by id instead of following the relation.
    """

    def get_project_code(self, obj):
        if obj.project_id is None:
            return None
        codes = self.context.get('project_codes')
        if codes is not None:
            return codes.get(obj.project_id)
        return Project.objects.filter(id=obj.project_id).values_list('code', flat=True).first()


class IncomeSerializer(ProjectCodeMixin, serializers.ModelSerializer):
    project = serializers.IntegerField(source='project_id', read_only=True)
    project_code = serializers.SerializerMethodField()

    class Meta:
        model = Income
        fields = [
            'id',
            'date',
            'description',
            'amount',
            'note',
            'project_income',
            'project',
            'project_code',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class IncomeInputSerializer(serializers.Serializer):
    date = serializers.DateField()
    description = serializers.CharField(max_length=255)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=MIN_AMOUNT)
    note = serializers.CharField(required=False, allow_blank=True)
    project_income = serializers.BooleanField(required=False)
    project = serializers.IntegerField(source='project_id', required=False, allow_null=True, min_value=1)


class ExpenseSerializer(ProjectCodeMixin, serializers.ModelSerializer):
    project = serializers.IntegerField(source='project_id', read_only=True)
    project_code = serializers.SerializerMethodField()

    class Meta:
        model = Expense
        fields = [
            'id',
            'date',
            'category',
            'description',
            'amount',
            'notes',
            'project_expense',
            'project',
            'project_code',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ExpenseInputSerializer(serializers.Serializer):
    date = serializers.DateField()
    category = serializers.CharField(max_length=100)
    description = serializers.CharField(max_length=255)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=MIN_AMOUNT)
    notes = serializers.CharField(required=False, allow_blank=True)
    project_expense = serializers.BooleanField(required=False)
    project = serializers.IntegerField(source='project_id', required=False, allow_null=True, min_value=1)


class ProjectPaymentSerializer(serializers.ModelSerializer):
    project_code = serializers.CharField(source='project.code', read_only=True)

    class Meta:
        model = ProjectPayment
        fields = [
            'id',
            'project',
            'project_code',
            'income',
            'amount',
            'payment_date',
            'description',
            'payment_type',
            'is_reconciliation',
            'created_at',
        ]
        read_only_fields = fields


class ProjectPaymentInputSerializer(serializers.Serializer):
    project = serializers.IntegerField(source='project_id', min_value=1)
    income = serializers.IntegerField(source='income_id', required=False, allow_null=True, min_value=1)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=MIN_AMOUNT)
    payment_date = serializers.DateField()
    description = serializers.CharField(max_length=255, required=False, allow_blank=True)
    payment_type = serializers.ChoiceField(choices=PaymentType.choices, required=False)


class RecordPaymentInputSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=MIN_AMOUNT)
    description = serializers.CharField(max_length=255, required=False, allow_blank=True)
    payment_date = serializers.DateField(required=False)


class PaymentHistorySerializer(serializers.Serializer):
    project_id = serializers.IntegerField()
    project_code = serializers.CharField()
    payments = ProjectPaymentSerializer(many=True)
    total_received = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    pending_amount = serializers.DecimalField(max_digits=14, decimal_places=2)


class FinanceFilterSerializer(serializers.Serializer):
    """Validate list query parameters for income and expense lists."""

    search = serializers.CharField(required=False, allow_blank=True)
    project = serializers.IntegerField(required=False, min_value=1)
    category = serializers.CharField(required=False, allow_blank=True)
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        start = attrs.get('start_date')
        end = attrs.get('end_date')
        if start and end and end < start:
            raise serializers.ValidationError({
                'end_date': 'End date cannot be before start date.'
            })
        return attrs
