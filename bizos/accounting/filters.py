import django_filters
from django.db.models import Q
from .models import Transaction


class TransactionFilter(django_filters.FilterSet):
    """Ledger filters: type, category, date range and free-text search"""
    search = django_filters.CharFilter(method='filter_search', label='Search')
    type = django_filters.ChoiceFilter(choices=Transaction.TYPE_CHOICES)
    category = django_filters.CharFilter(field_name='category', lookup_expr='iexact')
    date_from = django_filters.DateFilter(field_name='date', lookup_expr='gte')
    date_to = django_filters.DateFilter(field_name='date', lookup_expr='lte')

    class Meta:
        model = Transaction
        fields = ['search', 'type', 'category', 'date_from', 'date_to']

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(Q(description__icontains=value) | Q(category__icontains=value))
