import logging
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from bizos.core.utils import get_request_profile, invalid_data_response, create_audit_log, editable_request_data
from bizos.businesses.permissions import get_accessible_business
from .models import Transaction
from .filters import TransactionFilter
from .serializers import TransactionSerializer
from .summaries import ledger_totals, monthly_data

logger = logging.getLogger('bizos.accounting')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def transactions_by_business(request, business_id):
    """
    Ledger of a business, newest first.

    Query params: type, category, date_from, date_to (YYYY-MM-DD), search
    """
    business = get_accessible_business(request, business_id)
    queryset = Transaction.objects.filter(business=business)

    filterset = TransactionFilter(request.query_params, queryset=queryset)
    if not filterset.is_valid():
        return invalid_data_response('Invalid filters', filterset.errors)
    return Response(TransactionSerializer(filterset.qs, many=True).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def transaction_create(request):
    serializer = TransactionSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_data_response('Invalid transaction data', serializer.errors)

    business = get_accessible_business(request, serializer.validated_data['business'].pk)
    transaction = serializer.save(created_by=get_request_profile(request))
    logger.info(f"Transaction {transaction.id} ({transaction.type} {transaction.amount}) recorded for business {business.id}")
    create_audit_log(request=request, action='create', model_name='Transaction',
                     object_id=transaction.id, object_name=transaction.description[:255])
    return Response(TransactionSerializer(transaction).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def transaction_detail(request, pk):
    """Retrieve, update or delete a transaction"""
    transaction = get_object_or_404(Transaction, pk=pk)
    get_accessible_business(request, transaction.business_id)

    if request.method == 'GET':
        return Response(TransactionSerializer(transaction).data)

    if request.method == 'DELETE':
        create_audit_log(request=request, action='delete', model_name='Transaction',
                         object_id=transaction.id, object_name=transaction.description[:255])
        transaction.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)

    # Rows stay with the business they were recorded for
    data = editable_request_data(request)
    data['business'] = str(transaction.business_id)
    serializer = TransactionSerializer(transaction, data=data, partial=request.method == 'PATCH')
    if serializer.is_valid():
        serializer.save()
        create_audit_log(request=request, action='update', model_name='Transaction',
                         object_id=transaction.id, object_name=transaction.description[:255])
        return Response(serializer.data)
    return invalid_data_response('Invalid transaction data', serializer.errors)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def transaction_summary(request, business_id):
    """Income, expenses, net profit and the last six months of revenue/expenses"""
    business = get_accessible_business(request, business_id)
    summary = ledger_totals(business)
    summary['monthly_data'] = monthly_data(business)
    return Response(summary)
