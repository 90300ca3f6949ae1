import logging
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from bizos.core.utils import invalid_data_response, create_audit_log, editable_request_data
from bizos.businesses.permissions import get_accessible_business
from .models import Website
from .filters import WebsiteFilter
from .serializers import WebsiteSerializer

logger = logging.getLogger('bizos.websites')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def websites_by_business(request, business_id):
    business = get_accessible_business(request, business_id)
    filterset = WebsiteFilter(request.query_params, queryset=Website.objects.filter(business=business))
    if not filterset.is_valid():
        return invalid_data_response('Invalid filters', filterset.errors)
    return Response(WebsiteSerializer(filterset.qs, many=True).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def website_create(request):
    serializer = WebsiteSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_data_response('Invalid website data', serializer.errors)

    business = get_accessible_business(request, serializer.validated_data['business'].pk)
    website = serializer.save()
    logger.info(f"Website '{website.name}' ({website.template}) created for business {business.id}")
    create_audit_log(request=request, action='create', model_name='Website',
                     object_id=website.id, object_name=website.name)
    return Response(WebsiteSerializer(website).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def website_detail(request, pk):
    website = get_object_or_404(Website, pk=pk)
    get_accessible_business(request, website.business_id)

    if request.method == 'GET':
        return Response(WebsiteSerializer(website).data)

    if request.method == 'DELETE':
        create_audit_log(request=request, action='delete', model_name='Website',
                         object_id=website.id, object_name=website.name)
        website.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)

    data = editable_request_data(request)
    data['business'] = str(website.business_id)
    serializer = WebsiteSerializer(website, data=data, partial=request.method == 'PATCH')
    if serializer.is_valid():
        serializer.save()
        create_audit_log(request=request, action='update', model_name='Website',
                         object_id=website.id, object_name=website.name)
        return Response(serializer.data)
    return invalid_data_response('Invalid website data', serializer.errors)
