import logging
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from bizos.core.utils import invalid_data_response, create_audit_log, editable_request_data
from bizos.businesses.permissions import get_accessible_business
from .models import Contact
from .filters import ContactFilter
from .serializers import ContactSerializer
from .summaries import contact_totals

logger = logging.getLogger('bizos.crm')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def contacts_by_business(request, business_id):
    """Contacts of a business; filter with status and search"""
    business = get_accessible_business(request, business_id)
    filterset = ContactFilter(request.query_params, queryset=Contact.objects.filter(business=business))
    if not filterset.is_valid():
        return invalid_data_response('Invalid filters', filterset.errors)
    return Response(ContactSerializer(filterset.qs, many=True).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def contact_create(request):
    serializer = ContactSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_data_response('Invalid contact data', serializer.errors)

    business = get_accessible_business(request, serializer.validated_data['business'].pk)
    contact = serializer.save()
    logger.info(f"Contact '{contact.name}' added to business {business.id} by {request.user.username}")
    create_audit_log(request=request, action='create', model_name='Contact',
                     object_id=contact.id, object_name=contact.name)
    return Response(ContactSerializer(contact).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def contact_detail(request, pk):
    """Retrieve, update or delete a contact"""
    contact = get_object_or_404(Contact, pk=pk)
    get_accessible_business(request, contact.business_id)

    if request.method == 'GET':
        return Response(ContactSerializer(contact).data)

    if request.method == 'DELETE':
        create_audit_log(request=request, action='delete', model_name='Contact',
                         object_id=contact.id, object_name=contact.name)
        contact.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)

    data = editable_request_data(request)
    data['business'] = str(contact.business_id)
    previous_status = contact.status
    serializer = ContactSerializer(contact, data=data, partial=request.method == 'PATCH')
    if serializer.is_valid():
        serializer.save()
        changes = {}
        if contact.status != previous_status:
            changes['status'] = {'from': previous_status, 'to': contact.status}
        create_audit_log(request=request, action='update', model_name='Contact',
                         object_id=contact.id, object_name=contact.name, changes=changes)
        return Response(serializer.data)
    return invalid_data_response('Invalid contact data', serializer.errors)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def contact_summary(request, business_id):
    business = get_accessible_business(request, business_id)
    return Response(contact_totals(business))
