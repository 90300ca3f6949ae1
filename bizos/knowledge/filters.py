import json

import django_filters
from django.db.models import Q
from .models import Document


class DocumentFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method='filter_search', label='Search')
    tag = django_filters.CharFilter(method='filter_tag', label='Tag')

    class Meta:
        model = Document
        fields = ['search', 'tag']

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(Q(title__icontains=value) | Q(content__icontains=value))

    def filter_tag(self, queryset, name, value):
        """
        Documents carrying the tag (case-insensitive).

        Matches the JSON-encoded string inside the stored list, which works the
        same way on SQLite and PostgreSQL.
        """
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(tags__icontains=json.dumps(value))
