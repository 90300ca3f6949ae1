import django_filters
from django.db.models import Q
from .models import Website


class WebsiteFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method='filter_search', label='Search')
    template = django_filters.ChoiceFilter(choices=Website.TEMPLATE_CHOICES)

    class Meta:
        model = Website
        fields = ['search', 'template']

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(Q(name__icontains=value) | Q(title__icontains=value))
