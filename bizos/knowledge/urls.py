from django.urls import path
from .views import documents_by_business, document_create, document_detail

urlpatterns = [
    path('documents/', document_create, name='document-create'),
    path('documents/business/<uuid:business_id>/', documents_by_business, name='documents-by-business'),
    path('documents/<uuid:pk>/', document_detail, name='document-detail'),
]
