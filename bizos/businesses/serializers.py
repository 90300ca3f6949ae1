from rest_framework import serializers
from .models import BusinessAccount


class BusinessAccountSerializer(serializers.ModelSerializer):
    owner_name = serializers.CharField(source='owner.full_name', read_only=True)

    class Meta:
        model = BusinessAccount
        fields = ['id', 'name', 'owner', 'owner_name', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']
        extra_kwargs = {'owner': {'required': False}}

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Business name cannot be blank")
        return value
