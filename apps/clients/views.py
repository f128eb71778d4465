from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema
from apps.accounts.permissions import IsManagerOrReadOnly
from .serializers import (
    ClientSerializer,
    ClientCreateSerializer,
    ClientStatsSerializer,
    ClientDropdownSerializer,
)
from .services import (
    create_client,
    update_client,
    delete_client,
    get_client_by_id,
    search_clients,
    get_clients_for_dropdown,
    get_client_stats,
)


class ClientPagination(PageNumberPagination):
    """Custom pagination for clients."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class ClientViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Client CRUD operations.

    list: Get all clients (?search= filters name, company, number, email)
    create: Create a new client
    retrieve: Get a specific client with project totals
    update: Update a client
    destroy: Delete a client that has no projects
    """

    serializer_class = ClientSerializer
    permission_classes = [IsAuthenticated, IsManagerOrReadOnly]
    pagination_class = ClientPagination
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        return search_clients(search=self.request.query_params.get('search'))

    def get_serializer_class(self):
        if self.action in ['create', 'update', 'partial_update']:
            return ClientCreateSerializer
        return ClientSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        client = create_client(**serializer.validated_data)

        return Response(
            ClientSerializer(get_client_by_id(client.id)).data,
            status=status.HTTP_201_CREATED
        )

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        client = get_client_by_id(kwargs['pk'])
        serializer = self.get_serializer(client, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        update_client(client_id=client.id, data=serializer.validated_data)

        return Response(ClientSerializer(get_client_by_id(client.id)).data)

    def destroy(self, request, *args, **kwargs):
        delete_client(client_id=kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: ClientStatsSerializer})
    @action(detail=False, methods=['get'])
    def stats(self, request):
        """Get client statistics."""
        return Response(ClientStatsSerializer(get_client_stats()).data)

    @extend_schema(responses={200: ClientDropdownSerializer(many=True)})
    @action(detail=False, methods=['get'])
    def dropdown(self, request):
        """Get a compact client list for selection inputs."""
        return Response(get_clients_for_dropdown())
