from django.urls import path
from .views import contacts_by_business, contact_create, contact_detail, contact_summary

urlpatterns = [
    path('contacts/', contact_create, name='contact-create'),
    path('contacts/business/<uuid:business_id>/', contacts_by_business, name='contacts-by-business'),
    path('contacts/business/<uuid:business_id>/summary/', contact_summary, name='contact-summary'),
    path('contacts/<uuid:pk>/', contact_detail, name='contact-detail'),
]
