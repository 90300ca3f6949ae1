from django.contrib import admin
from .models import GeneratedImage


@admin.register(GeneratedImage)
class GeneratedImageAdmin(admin.ModelAdmin):
    list_display = ['business', 'style', 'prompt', 'storage_path', 'created_at']
    list_filter = ['style', 'created_at']
    search_fields = ['prompt', 'business__name']
    ordering = ['-created_at']
    readonly_fields = ['image_url', 'storage_path', 'created_at']
