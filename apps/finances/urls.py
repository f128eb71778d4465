from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'finances'

router = DefaultRouter()
router.register(r'incomes', views.IncomeViewSet, basename='income')
router.register(r'expenses', views.ExpenseViewSet, basename='expense')
router.register(r'payments', views.ProjectPaymentViewSet, basename='payment')

urlpatterns = [
    # Income / Expense / Payment ViewSet routes
    # GET    /api/finances/incomes/                 - List incomes
    # POST   /api/finances/incomes/                 - Create income
    # PATCH  /api/finances/incomes/{id}/            - Update income
    # DELETE /api/finances/incomes/{id}/            - Delete income
    # (same shape for expenses/ and payments/)

    # Custom actions
    # GET    /api/finances/expenses/categories/     - Distinct categories

    # Project payments
    # GET    /api/finances/projects/{id}/payments/  - Payment history
    # POST   /api/finances/projects/{id}/payments/  - Record payment
    path('projects/<int:project_id>/payments/', views.project_payments, name='project-payments'),

    path('', include(router.urls)),
]
