import django_filters
from django.db.models import Q
from .models import Contact


class ContactFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method='filter_search', label='Search')
    status = django_filters.ChoiceFilter(choices=Contact.STATUS_CHOICES)

    class Meta:
        model = Contact
        fields = ['search', 'status']

    def filter_search(self, queryset, name, value):
        """Match name, email, company or phone"""
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(name__icontains=value) |
            Q(email__icontains=value) |
            Q(company__icontains=value) |
            Q(phone__icontains=value)
        )
