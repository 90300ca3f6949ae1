from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User, Profile, AuditLog


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'first_name', 'last_name', 'is_active', 'is_staff', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']


class ProfileSerializer(serializers.ModelSerializer):
    id = serializers.UUIDField(source='user_id', read_only=True)

    class Meta:
        model = Profile
        fields = ['id', 'email', 'full_name', 'avatar_url', 'role', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']


class ProfileCreateSerializer(serializers.ModelSerializer):
    """Profile creation for an existing user; the id is the user's id"""
    id = serializers.PrimaryKeyRelatedField(source='user', queryset=User.objects.all())

    class Meta:
        model = Profile
        fields = ['id', 'email', 'full_name', 'avatar_url', 'role', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']

    def validate_id(self, user):
        if Profile.objects.filter(user=user).exists():
            raise serializers.ValidationError("A profile already exists for this user")
        return user

    def to_representation(self, instance):
        return ProfileSerializer(instance).data


class UserCreateSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, validators=[validate_password])
    password_confirm = serializers.CharField(write_only=True)
    full_name = serializers.CharField(write_only=True, max_length=255)
    role = serializers.ChoiceField(write_only=True, choices=Profile.ROLE_CHOICES, default='business_owner')

    class Meta:
        model = User
        fields = ['username', 'email', 'password', 'password_confirm', 'full_name', 'role']

    def validate(self, attrs):
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({"password": "Passwords don't match"})
        return attrs

    def create(self, validated_data):
        validated_data.pop('password_confirm')
        password = validated_data.pop('password')
        full_name = validated_data.pop('full_name')
        role = validated_data.pop('role')
        user = User(**validated_data, is_active=True)
        user.set_password(password)
        user.save()
        Profile.objects.create(user=user, email=user.email or None, full_name=full_name, role=role)
        return user


class AuditLogSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source='user.username', read_only=True, default=None)

    class Meta:
        model = AuditLog
        fields = ['id', 'user', 'username', 'action', 'model_name', 'object_id', 'object_name',
                  'changes', 'ip_address', 'created_at']
