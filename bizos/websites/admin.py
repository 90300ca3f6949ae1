from django.contrib import admin
from .models import Website


@admin.register(Website)
class WebsiteAdmin(admin.ModelAdmin):
    list_display = ['name', 'template', 'title', 'business', 'updated_at']
    list_filter = ['template']
    search_fields = ['name', 'title']
