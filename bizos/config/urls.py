"""
URL configuration for the Business OS API.

Every app contributes its routes under the shared ``api/`` prefix.
"""
from django.contrib import admin
from django.urls import path, include, re_path
from django.conf import settings
from django.views.static import serve

admin.site.site_header = "Business OS Admin Panel"
admin.site.site_title = "Business OS Admin Portal"
admin.site.index_title = "Welcome to the Business OS Admin Portal"

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('bizos.core.urls')),
    path('api/', include('bizos.businesses.urls')),
    path('api/', include('bizos.chat.urls')),
    path('api/', include('bizos.studio.urls')),
    path('api/', include('bizos.accounting.urls')),
    path('api/', include('bizos.crm.urls')),
    path('api/', include('bizos.knowledge.urls')),
    path('api/', include('bizos.websites.urls')),
    path('api/', include('bizos.dashboard.urls')),
    re_path(r'^media/(?P<path>.*)$', serve, {'document_root': settings.MEDIA_ROOT}),
]
