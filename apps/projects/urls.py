from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'projects'

router = DefaultRouter()
router.register(r'', views.ProjectViewSet, basename='project')

urlpatterns = [
    # GET    /api/projects/                      - List projects
    # POST   /api/projects/                      - Create project
    # GET    /api/projects/{id}/                 - Get project
    # PATCH  /api/projects/{id}/                 - Update project
    # DELETE /api/projects/{id}/?force=true      - Delete project

    # Custom actions
    # GET    /api/projects/codes/                - Codes for pickers
    # GET    /api/projects/stats/                - Portfolio statistics
    # GET    /api/projects/by-status/{status}/   - ongoing | pending | completed
    # GET    /api/projects/code/{code}/          - Lookup by code
    # POST   /api/projects/{id}/recompute/       - Recompute derived financials

    # Completion
    # GET    /api/projects/completion/           - Completion statistics
    # POST   /api/projects/completion/run/       - Auto-complete eligible projects
    # GET    /api/projects/{id}/completion/      - Completion criteria of a project
    # POST   /api/projects/{id}/complete/        - Mark a project completed
    path('', include(router.urls)),
]
