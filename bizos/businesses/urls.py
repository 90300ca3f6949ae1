from django.urls import path
from .views import business_accounts_by_owner, business_account_create, business_account_detail

urlpatterns = [
    path('business-accounts/', business_account_create, name='business-account-create'),
    path('business-accounts/owner/<uuid:owner_id>/', business_accounts_by_owner, name='business-accounts-by-owner'),
    path('business-accounts/<uuid:pk>/', business_account_detail, name='business-account-detail'),
]
