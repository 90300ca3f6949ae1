"""Ledger aggregates shared by the summary endpoint and the dashboard"""
from datetime import date
from decimal import Decimal

from django.db.models import Sum, Q, DecimalField
from django.db.models.functions import TruncMonth
from django.utils import timezone
from .models import Transaction


def month_starts(today=None, count=6):
    """First day of the last `count` months, oldest first, ending with the current month"""
    today = today or timezone.localdate()
    year, month = today.year, today.month
    starts = []
    for _ in range(count):
        starts.append(date(year, month, 1))
        month -= 1
        if month == 0:
            month = 12
            year -= 1
    starts.reverse()
    return starts


def ledger_totals(business):
    totals = Transaction.objects.filter(business=business).aggregate(
        total_income=Sum('amount', filter=Q(type='income'), output_field=DecimalField()),
        total_expenses=Sum('amount', filter=Q(type='expense'), output_field=DecimalField()),
    )
    total_income = totals['total_income'] or Decimal('0.00')
    total_expenses = totals['total_expenses'] or Decimal('0.00')
    return {
        'total_income': float(total_income),
        'total_expenses': float(total_expenses),
        'net_profit': float(total_income - total_expenses),
    }


def monthly_data(business, today=None, count=6):
    """
    Revenue and expenses per month for the last `count` months.

    Empty when the business has no transactions at all, so charts can show
    their empty state.
    """
    transactions = Transaction.objects.filter(business=business)
    if not transactions.exists():
        return []

    starts = month_starts(today, count)
    buckets = {start: {'revenue': Decimal('0.00'), 'expenses': Decimal('0.00')} for start in starts}
    rows = transactions.filter(date__gte=starts[0]).annotate(
        month=TruncMonth('date')
    ).values('month', 'type').annotate(
        total=Sum('amount', output_field=DecimalField())
    ).order_by('month')

    for row in rows:
        month = row['month']
        if hasattr(month, 'date'):
            month = month.date()
        bucket = buckets.get(month)
        if bucket is None:
            continue
        key = 'revenue' if row['type'] == 'income' else 'expenses'
        bucket[key] += row['total'] or Decimal('0.00')

    return [
        {
            'month': start.strftime('%b'),
            'revenue': float(buckets[start]['revenue']),
            'expenses': float(buckets[start]['expenses']),
        }
        for start in starts
    ]
