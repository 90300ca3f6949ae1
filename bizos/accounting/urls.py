from django.urls import path
from .views import transactions_by_business, transaction_create, transaction_detail, transaction_summary

urlpatterns = [
    path('transactions/', transaction_create, name='transaction-create'),
    path('transactions/business/<uuid:business_id>/', transactions_by_business, name='transactions-by-business'),
    path('transactions/business/<uuid:business_id>/summary/', transaction_summary, name='transaction-summary'),
    path('transactions/<uuid:pk>/', transaction_detail, name='transaction-detail'),
]
