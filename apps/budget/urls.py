from django.urls import path
from . import views

app_name = 'budget'

urlpatterns = [
    path('overview/', views.budget_overview, name='overview'),
    path('categories/', views.budget_categories, name='categories'),
    path('summary/', views.financial_summary, name='summary'),
    path('monthly/', views.monthly_income_expense, name='monthly'),
    path('expense-totals/', views.expense_totals, name='expense-totals'),
    path('projects/', views.project_summaries, name='projects'),
    path('dashboard/', views.dashboard, name='dashboard'),
]
