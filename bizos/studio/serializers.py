from rest_framework import serializers
from .models import GeneratedImage


class GeneratedImageSerializer(serializers.ModelSerializer):
    business_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = GeneratedImage
        fields = ['id', 'business_id', 'prompt', 'style', 'image_url', 'storage_path', 'created_at']
        read_only_fields = fields


class GenerateImageRequestSerializer(serializers.Serializer):
    """Body of the generate-image endpoint"""
    prompt = serializers.CharField(max_length=4000)
    style = serializers.CharField(max_length=50)
    business_id = serializers.UUIDField()

    def validate_prompt(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Prompt cannot be blank")
        return value
