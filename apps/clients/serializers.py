from rest_framework import serializers
from .models import Client


class ClientSerializer(serializers.ModelSerializer):
    """Main serializer for clients with project totals."""

    project_count = serializers.IntegerField(read_only=True, default=0)
    total_amount = serializers.DecimalField(
        max_digits=14,
        decimal_places=2,
        read_only=True,
        default=0,
    )

    class Meta:
        model = Client
        fields = [
            'id',
            'name',
            'company',
            'number',
            'email',
            'project_count',
            'total_amount',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class ClientCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating and updating clients."""

    class Meta:
        model = Client
        fields = ['name', 'company', 'number', 'email']


class ClientStatsSerializer(serializers.Serializer):
    total_clients = serializers.IntegerField()
    clients_with_projects = serializers.IntegerField()
    total_projects = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    average_projects_per_client = serializers.FloatField()


class ClientDropdownSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    company = serializers.CharField()
