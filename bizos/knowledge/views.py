import logging
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from bizos.core.utils import get_request_profile, invalid_data_response, create_audit_log, editable_request_data
from bizos.businesses.permissions import get_accessible_business
from .models import Document
from .filters import DocumentFilter
from .serializers import DocumentSerializer

logger = logging.getLogger('bizos.knowledge')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def documents_by_business(request, business_id):
    """Knowledge base of a business, most recently updated first"""
    business = get_accessible_business(request, business_id)
    queryset = Document.objects.filter(business=business).select_related('created_by')
    filterset = DocumentFilter(request.query_params, queryset=queryset)
    if not filterset.is_valid():
        return invalid_data_response('Invalid filters', filterset.errors)
    return Response(DocumentSerializer(filterset.qs, many=True).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def document_create(request):
    serializer = DocumentSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_data_response('Invalid document data', serializer.errors)

    business = get_accessible_business(request, serializer.validated_data['business'].pk)
    document = serializer.save(created_by=get_request_profile(request))
    logger.info(f"Document '{document.title}' created in business {business.id} by {request.user.username}")
    create_audit_log(request=request, action='create', model_name='Document',
                     object_id=document.id, object_name=document.title[:255])
    return Response(DocumentSerializer(document).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def document_detail(request, pk):
    document = get_object_or_404(Document.objects.select_related('created_by'), pk=pk)
    get_accessible_business(request, document.business_id)

    if request.method == 'GET':
        return Response(DocumentSerializer(document).data)

    if request.method == 'DELETE':
        create_audit_log(request=request, action='delete', model_name='Document',
                         object_id=document.id, object_name=document.title[:255])
        document.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)

    data = editable_request_data(request)
    data['business'] = str(document.business_id)
    serializer = DocumentSerializer(document, data=data, partial=request.method == 'PATCH')
    if serializer.is_valid():
        serializer.save()
        create_audit_log(request=request, action='update', model_name='Document',
                         object_id=document.id, object_name=document.title[:255])
        return Response(serializer.data)
    return invalid_data_response('Invalid document data', serializer.errors)
