from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'clients'

router = DefaultRouter()
router.register(r'', views.ClientViewSet, basename='client')

urlpatterns = [
    # GET    /api/clients/            - List clients
    # POST   /api/clients/            - Create client
    # GET    /api/clients/{id}/       - Get client
    # PATCH  /api/clients/{id}/       - Update client
    # DELETE /api/clients/{id}/       - Delete client (409 if it has projects)

    # Custom actions
    # GET    /api/clients/stats/      - Client statistics
    # GET    /api/clients/dropdown/   - Compact list for pickers
    path('', include(router.urls)),
]
