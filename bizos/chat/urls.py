from django.urls import path
from .views import (
    chat_groups_by_business, chat_group_create, chat_group_detail,
    group_members_list, group_member_add, group_member_detail,
    invitation_by_code, invitations_by_group, invitation_create, invitation_deactivate, invitation_accept,
    chat_messages_list, chat_message_create, chat_message_update,
    typing_indicators_list, typing_indicator_upsert, typing_indicator_clear
)

urlpatterns = [
    # ChatGroup endpoints
    path('chat-groups/', chat_group_create, name='chat-group-create'),
    path('chat-groups/business/<uuid:business_id>/', chat_groups_by_business, name='chat-groups-by-business'),
    path('chat-groups/<uuid:pk>/', chat_group_detail, name='chat-group-detail'),

    # GroupMember endpoints
    path('group-members/', group_member_add, name='group-member-add'),
    path('group-members/<uuid:group_id>/', group_members_list, name='group-members-list'),
    path('group-members/<uuid:group_id>/<uuid:user_id>/', group_member_detail, name='group-member-detail'),

    # GroupInvitation endpoints
    path('group-invitations/', invitation_create, name='invitation-create'),
    path('group-invitations/code/<str:code>/', invitation_by_code, name='invitation-by-code'),
    path('group-invitations/code/<str:code>/accept/', invitation_accept, name='invitation-accept'),
    path('group-invitations/group/<uuid:group_id>/', invitations_by_group, name='invitations-by-group'),
    path('group-invitations/<uuid:pk>/deactivate/', invitation_deactivate, name='invitation-deactivate'),

    # ChatMessage endpoints
    path('chat-messages/', chat_message_create, name='chat-message-create'),
    path('chat-messages/message/<uuid:pk>/', chat_message_update, name='chat-message-update'),
    path('chat-messages/<uuid:group_id>/', chat_messages_list, name='chat-messages-list'),

    # TypingIndicator endpoints
    path('typing-indicators/', typing_indicator_upsert, name='typing-indicator-upsert'),
    path('typing-indicators/<uuid:group_id>/', typing_indicators_list, name='typing-indicators-list'),
    path('typing-indicators/<uuid:group_id>/<uuid:user_id>/', typing_indicator_clear, name='typing-indicator-clear'),
]
