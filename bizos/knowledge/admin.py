from django.contrib import admin
from .models import Document


@admin.register(Document)
class DocumentAdmin(admin.ModelAdmin):
    list_display = ['title', 'business', 'created_by', 'updated_at']
    list_filter = ['updated_at']
    search_fields = ['title', 'content']
    ordering = ['-updated_at']
