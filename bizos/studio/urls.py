from django.urls import path
from .views import generated_images_by_business, generate_image_view, generated_image_delete

urlpatterns = [
    path('generate-image/', generate_image_view, name='generate-image'),
    path('generated-images/item/<uuid:pk>/', generated_image_delete, name='generated-image-delete'),
    path('generated-images/<uuid:business_id>/', generated_images_by_business, name='generated-images-by-business'),
]
