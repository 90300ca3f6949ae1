from django.contrib import admin
from .models import Transaction


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    list_display = ['date', 'business', 'type', 'category', 'amount', 'description']
    list_filter = ['type', 'category', 'date']
    search_fields = ['description', 'category', 'business__name']
    date_hierarchy = 'date'
    ordering = ['-date']
