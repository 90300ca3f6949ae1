from rest_framework import serializers
from .models import Document


class DocumentSerializer(serializers.ModelSerializer):
    tags = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)
    created_by_name = serializers.CharField(source='created_by.full_name', read_only=True, default=None)

    class Meta:
        model = Document
        fields = ['id', 'business', 'title', 'content', 'tags', 'created_by', 'created_by_name',
                  'created_at', 'updated_at']
        read_only_fields = ['created_by', 'created_at', 'updated_at']

    def validate_title(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Title cannot be blank")
        return value

    def validate_tags(self, value):
        tags = []
        for tag in value:
            tag = tag.strip()
            if not tag:
                raise serializers.ValidationError("Tags must be non-empty strings")
            if tag not in tags:
                tags.append(tag)
        return tags
