import logging
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from bizos.core.utils import invalid_data_response, create_audit_log
from bizos.businesses.permissions import get_accessible_business
from .models import GeneratedImage
from .serializers import GeneratedImageSerializer, GenerateImageRequestSerializer
from .image_service import generate_image, delete_stored_image

logger = logging.getLogger('bizos.studio')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def generated_images_by_business(request, business_id):
    """Gallery of a business, newest first"""
    business = get_accessible_business(request, business_id)
    images = GeneratedImage.objects.filter(business=business).order_by('-created_at')
    return Response(GeneratedImageSerializer(images, many=True).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def generate_image_view(request):
    """
    Generate an image from a prompt and a style.

    Body: {prompt, style, business_id}. Provider failures surface as 500 with
    the provider's reason.
    """
    serializer = GenerateImageRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_data_response(
            'Missing required fields: prompt, style, and business_id are required',
            serializer.errors,
        )

    data = serializer.validated_data
    business = get_accessible_business(request, data['business_id'])
    stored = generate_image(business.id, data['prompt'], data['style'])

    image = GeneratedImage.objects.create(
        business=business,
        prompt=data['prompt'],
        style=data['style'],
        image_url=stored['image_url'],
        storage_path=stored['storage_path'],
    )
    logger.info(f"Generated image {image.id} for business {business.id} by {request.user.username}")
    create_audit_log(request=request, action='image_generate', model_name='GeneratedImage',
                     object_id=image.id, object_name=image.prompt[:255],
                     changes={'style': image.style, 'storage_path': image.storage_path})
    return Response(GeneratedImageSerializer(image).data, status=status.HTTP_201_CREATED)


@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def generated_image_delete(request, pk):
    image = get_object_or_404(GeneratedImage, pk=pk)
    get_accessible_business(request, image.business_id)
    delete_stored_image(image.storage_path)
    create_audit_log(request=request, action='delete', model_name='GeneratedImage',
                     object_id=image.id, object_name=image.prompt[:255])
    image.delete()
    logger.info(f"Generated image {pk} deleted by {request.user.username}")
    return Response(status=status.HTTP_204_NO_CONTENT)
