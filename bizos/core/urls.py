from django.urls import path
from .views import (
    CustomTokenObtainPairView, CustomTokenRefreshView, register, user_me,
    profile_create, profile_detail, profile_by_email,
    audit_log_list
)

urlpatterns = [
    # Auth endpoints
    path('auth/register/', register, name='register'),
    path('auth/login/', CustomTokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('auth/refresh/', CustomTokenRefreshView.as_view(), name='token_refresh'),
    path('auth/me/', user_me, name='user-me'),

    # Profile endpoints
    path('profiles/', profile_create, name='profile-create'),
    path('profiles/by-email/', profile_by_email, name='profile-by-email'),
    path('profiles/<uuid:pk>/', profile_detail, name='profile-detail'),

    # AuditLog endpoints
    path('audit-logs/', audit_log_list, name='audit-log-list'),
]
