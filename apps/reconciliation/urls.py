from django.urls import path
from . import views

app_name = 'reconciliation'

urlpatterns = [
    # Admin role only
    path('reconcile/', views.reconcile, name='reconcile'),
    path('validate/', views.validate, name='validate'),
    path('correct/', views.correct, name='correct'),
    path('stats/', views.stats, name='stats'),
    path('audit/', views.audit, name='audit'),
]
