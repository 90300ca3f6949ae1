from rest_framework import serializers
from .models import Contact


class ContactSerializer(serializers.ModelSerializer):
    class Meta:
        model = Contact
        fields = ['id', 'business', 'name', 'email', 'phone', 'company', 'status', 'value',
                  'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name is required")
        return value

    def validate_value(self, value):
        if value < 0:
            raise serializers.ValidationError("Value cannot be negative")
        return value
