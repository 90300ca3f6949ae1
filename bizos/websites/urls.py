from django.urls import path
from .views import websites_by_business, website_create, website_detail

urlpatterns = [
    path('websites/', website_create, name='website-create'),
    path('websites/business/<uuid:business_id>/', websites_by_business, name='websites-by-business'),
    path('websites/<uuid:pk>/', website_detail, name='website-detail'),
]
