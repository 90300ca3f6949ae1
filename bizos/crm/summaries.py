from decimal import Decimal

from django.db.models import Count, Sum, Q, DecimalField
from .models import Contact


def contact_totals(business):
    """Pipeline counts and the total value across all contacts"""
    totals = Contact.objects.filter(business=business).aggregate(
        customer_count=Count('id', filter=Q(status='customer')),
        lead_count=Count('id', filter=Q(status='lead')),
        prospect_count=Count('id', filter=Q(status='prospect')),
        total_value=Sum('value', output_field=DecimalField()),
    )
    return {
        'customer_count': totals['customer_count'],
        'lead_count': totals['lead_count'],
        'prospect_count': totals['prospect_count'],
        'total_value': float(totals['total_value'] or Decimal('0.00')),
    }
