import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework.exceptions import PermissionDenied
from bizos.core.utils import get_request_profile, invalid_data_response, create_audit_log, editable_request_data
from .models import BusinessAccount
from .permissions import get_accessible_business, get_owned_business
from .serializers import BusinessAccountSerializer

logger = logging.getLogger('bizos.businesses')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def business_accounts_by_owner(request, owner_id):
    """List the business accounts owned by a profile"""
    if owner_id != request.user.pk and not request.user.is_staff:
        raise PermissionDenied('You can only list your own business accounts')
    accounts = BusinessAccount.objects.filter(owner_id=owner_id).select_related('owner')
    serializer = BusinessAccountSerializer(accounts, many=True)
    return Response(serializer.data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def business_account_create(request):
    """Create a business account owned by the requester"""
    profile = get_request_profile(request)
    serializer = BusinessAccountSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_data_response('Invalid business account data', serializer.errors)

    owner = serializer.validated_data.get('owner', profile)
    if owner.pk != profile.pk and not request.user.is_staff:
        raise PermissionDenied('You can only create business accounts for yourself')

    account = serializer.save(owner=owner)
    logger.info(f"Business account '{account.name}' created by {request.user.username}")
    create_audit_log(request=request, action='create', model_name='BusinessAccount',
                     object_id=account.id, object_name=account.name)
    return Response(BusinessAccountSerializer(account).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def business_account_detail(request, pk):
    """Retrieve, update or delete a business account"""
    if request.method == 'GET':
        account = get_accessible_business(request, pk)
        return Response(BusinessAccountSerializer(account).data)

    account = get_owned_business(request, pk)
    if request.method == 'DELETE':
        logger.info(f"Business account '{account.name}' deleted by {request.user.username}")
        create_audit_log(request=request, action='delete', model_name='BusinessAccount',
                         object_id=account.id, object_name=account.name)
        account.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)

    # Ownership transfer is not done through this endpoint
    data = editable_request_data(request)
    data.pop('owner', None)
    serializer = BusinessAccountSerializer(account, data=data, partial=request.method == 'PATCH')
    if serializer.is_valid():
        serializer.save()
        return Response(serializer.data)
    return invalid_data_response('Invalid business account data', serializer.errors)
