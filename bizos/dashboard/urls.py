from django.urls import path
from .views import dashboard_kpis

urlpatterns = [
    path('dashboard/<uuid:business_id>/', dashboard_kpis, name='dashboard-kpis'),
]
