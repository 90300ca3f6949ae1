from django.contrib import admin
from .models import ChatGroup, GroupMember, GroupInvitation, ChatMessage, TypingIndicator


class GroupMemberInline(admin.TabularInline):
    model = GroupMember
    extra = 0
    raw_id_fields = ['user']


@admin.register(ChatGroup)
class ChatGroupAdmin(admin.ModelAdmin):
    list_display = ['name', 'business', 'created_by', 'created_at']
    list_filter = ['created_at']
    search_fields = ['name', 'business__name']
    ordering = ['-created_at']
    inlines = [GroupMemberInline]


@admin.register(GroupMember)
class GroupMemberAdmin(admin.ModelAdmin):
    list_display = ['user', 'group', 'is_admin', 'joined_at']
    list_filter = ['is_admin', 'joined_at']
    search_fields = ['user__full_name', 'user__email', 'group__name']


@admin.register(GroupInvitation)
class GroupInvitationAdmin(admin.ModelAdmin):
    list_display = ['invitation_code', 'group', 'is_active', 'current_uses', 'max_uses', 'expires_at', 'created_at']
    list_filter = ['is_active', 'created_at']
    search_fields = ['invitation_code', 'group__name']
    readonly_fields = ['invitation_code', 'current_uses', 'created_at']


@admin.register(ChatMessage)
class ChatMessageAdmin(admin.ModelAdmin):
    list_display = ['user', 'group', 'message_type', 'content', 'created_at']
    list_filter = ['message_type', 'created_at']
    search_fields = ['content', 'user__full_name', 'group__name']
    ordering = ['-created_at']


@admin.register(TypingIndicator)
class TypingIndicatorAdmin(admin.ModelAdmin):
    list_display = ['user', 'group', 'last_typing']
    ordering = ['-last_typing']
