from datetime import timedelta

from django.utils import timezone
from rest_framework import serializers
from .models import ChatGroup, GroupMember, GroupInvitation, ChatMessage, TypingIndicator


def profile_summary(profile):
    """Name and avatar embedded in member, message and typing payloads"""
    if profile is None:
        return {'full_name': '', 'avatar_url': None}
    return {'full_name': profile.full_name or '', 'avatar_url': profile.avatar_url}


class ChatGroupSerializer(serializers.ModelSerializer):
    member_count = serializers.SerializerMethodField()
    is_admin = serializers.SerializerMethodField()

    class Meta:
        model = ChatGroup
        fields = ['id', 'name', 'description', 'business', 'created_by', 'member_count', 'is_admin',
                  'created_at', 'updated_at']
        read_only_fields = ['created_by', 'created_at', 'updated_at']

    def get_member_count(self, obj):
        count = getattr(obj, 'member_count', None)
        if count is None:
            count = obj.members.count()
        return count

    def get_is_admin(self, obj):
        annotated = getattr(obj, 'requester_is_admin', None)
        if annotated is not None:
            return annotated
        profile = self.context.get('profile')
        return bool(profile) and obj.is_admin(profile)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Group name cannot be blank")
        return value


class GroupMemberSerializer(serializers.ModelSerializer):
    profiles = serializers.SerializerMethodField()
    email = serializers.EmailField(source='user.email', read_only=True)

    class Meta:
        model = GroupMember
        fields = ['id', 'group', 'user', 'is_admin', 'joined_at', 'email', 'profiles']
        read_only_fields = ['joined_at']
        validators = []

    def get_profiles(self, obj):
        return profile_summary(obj.user)

    def validate(self, attrs):
        if self.instance is None:
            if GroupMember.objects.filter(group=attrs['group'], user=attrs['user']).exists():
                raise serializers.ValidationError({'user': "User is already a member of this group"})
        return attrs


class GroupInvitationSerializer(serializers.ModelSerializer):
    expires_in_days = serializers.IntegerField(write_only=True, required=False, allow_null=True, min_value=1)
    group_name = serializers.CharField(source='group.name', read_only=True)
    business_name = serializers.CharField(source='group.business.name', read_only=True)
    is_valid = serializers.SerializerMethodField()
    reason = serializers.SerializerMethodField()

    class Meta:
        model = GroupInvitation
        fields = ['id', 'group', 'group_name', 'business_name', 'created_by', 'invitation_code',
                  'expires_at', 'expires_in_days', 'max_uses', 'current_uses', 'is_active',
                  'is_valid', 'reason', 'created_at']
        read_only_fields = ['created_by', 'invitation_code', 'current_uses', 'is_active', 'created_at']
        extra_kwargs = {'max_uses': {'min_value': 1}}

    def get_is_valid(self, obj):
        return obj.is_valid

    def get_reason(self, obj):
        return obj.invalid_reason()

    def validate_expires_at(self, value):
        if value and value <= timezone.now():
            raise serializers.ValidationError("Expiry must be in the future")
        return value

    def create(self, validated_data):
        expires_in_days = validated_data.pop('expires_in_days', None)
        if expires_in_days:
            validated_data['expires_at'] = timezone.now() + timedelta(days=expires_in_days)
        return super().create(validated_data)


class ChatMessageSerializer(serializers.ModelSerializer):
    profiles = serializers.SerializerMethodField()

    class Meta:
        model = ChatMessage
        fields = ['id', 'group', 'user', 'content', 'message_type', 'file_url', 'file_name',
                  'reply_to', 'profiles', 'created_at', 'updated_at']
        read_only_fields = ['user', 'created_at', 'updated_at']

    def get_profiles(self, obj):
        return profile_summary(obj.user)

    def validate_content(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Message content cannot be empty")
        return value

    def validate(self, attrs):
        group = attrs.get('group', getattr(self.instance, 'group', None))
        reply_to = attrs.get('reply_to')
        if reply_to is not None and reply_to.group_id != group.pk:
            raise serializers.ValidationError({'reply_to': "Replies must reference a message in the same group"})
        message_type = attrs.get('message_type', getattr(self.instance, 'message_type', 'text'))
        file_url = attrs.get('file_url', getattr(self.instance, 'file_url', None))
        if message_type in ('image', 'file') and not file_url:
            raise serializers.ValidationError({'file_url': f"file_url is required for {message_type} messages"})
        return attrs


class ChatMessageUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = ChatMessage
        fields = ['content']

    def validate_content(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Message content cannot be empty")
        return value

    def to_representation(self, instance):
        return ChatMessageSerializer(instance).data


class TypingIndicatorSerializer(serializers.ModelSerializer):
    profiles = serializers.SerializerMethodField()

    class Meta:
        model = TypingIndicator
        fields = ['id', 'group', 'user', 'last_typing', 'profiles']
        read_only_fields = ['user', 'last_typing']
        validators = []

    def get_profiles(self, obj):
        return profile_summary(obj.user)
