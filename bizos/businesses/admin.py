from django.contrib import admin
from .models import BusinessAccount


@admin.register(BusinessAccount)
class BusinessAccountAdmin(admin.ModelAdmin):
    list_display = ['name', 'owner', 'created_at', 'updated_at']
    list_filter = ['created_at']
    search_fields = ['name', 'owner__full_name', 'owner__email']
    ordering = ['name']
