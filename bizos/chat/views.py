import logging
from django.conf import settings
from django.db.models import Count, Exists, OuterRef
from django.shortcuts import get_object_or_404
from django.utils.dateparse import parse_datetime
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.exceptions import PermissionDenied
from bizos.core.utils import get_request_profile, invalid_data_response, create_audit_log, editable_request_data
from bizos.businesses.permissions import get_accessible_business
from .models import ChatGroup, GroupMember, GroupInvitation, ChatMessage, TypingIndicator
from .serializers import (
    ChatGroupSerializer, GroupMemberSerializer, GroupInvitationSerializer,
    ChatMessageSerializer, ChatMessageUpdateSerializer, TypingIndicatorSerializer
)
from .utils import (
    generate_invitation_code, can_manage_group, get_group_for_member, get_group_for_admin,
    require_membership, create_group_with_admin, accept_invitation, touch_typing_indicator
)

logger = logging.getLogger('bizos.chat')


# ChatGroup views
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def chat_groups_by_business(request, business_id):
    """List the chat groups of a business with member counts and the requester's admin flag"""
    business = get_accessible_business(request, business_id)
    profile = get_request_profile(request)

    groups = ChatGroup.objects.filter(business=business).annotate(
        member_count=Count('members', distinct=True),
        requester_is_admin=Exists(
            GroupMember.objects.filter(group=OuterRef('pk'), user=profile, is_admin=True)
        ),
        requester_is_member=Exists(
            GroupMember.objects.filter(group=OuterRef('pk'), user=profile)
        ),
    )
    if request.query_params.get('mine', '').lower() in ('1', 'true', 'yes'):
        groups = groups.filter(requester_is_member=True)

    serializer = ChatGroupSerializer(groups, many=True, context={'profile': profile})
    return Response(serializer.data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def chat_group_create(request):
    """Create a chat group; the creator becomes its first admin"""
    serializer = ChatGroupSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_data_response('Invalid chat group data', serializer.errors)

    business = get_accessible_business(request, serializer.validated_data['business'].pk)
    profile = get_request_profile(request)
    group = create_group_with_admin(
        business,
        profile,
        serializer.validated_data['name'],
        serializer.validated_data.get('description'),
    )
    logger.info(f"Chat group '{group.name}' created in business {business.id} by {request.user.username}")
    create_audit_log(request=request, action='create', model_name='ChatGroup',
                     object_id=group.id, object_name=group.name)
    return Response(ChatGroupSerializer(group, context={'profile': profile}).data,
                    status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def chat_group_detail(request, pk):
    """Retrieve, update or delete a chat group"""
    if request.method == 'GET':
        group, profile = get_group_for_member(request, pk)
        return Response(ChatGroupSerializer(group, context={'profile': profile}).data)

    group, profile = get_group_for_admin(request, pk)
    if request.method == 'DELETE':
        logger.info(f"Chat group '{group.name}' deleted by {request.user.username}")
        create_audit_log(request=request, action='delete', model_name='ChatGroup',
                         object_id=group.id, object_name=group.name)
        group.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)

    # Groups never move between businesses
    data = editable_request_data(request)
    data.pop('business', None)
    serializer = ChatGroupSerializer(group, data=data, partial=True, context={'profile': profile})
    if serializer.is_valid():
        serializer.save()
        create_audit_log(request=request, action='update', model_name='ChatGroup',
                         object_id=group.id, object_name=group.name, changes=dict(data))
        return Response(serializer.data)
    return invalid_data_response('Invalid chat group data', serializer.errors)


# GroupMember views
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def group_members_list(request, group_id):
    """Members of a group ordered by join time"""
    group, _ = get_group_for_member(request, group_id)
    members = group.members.select_related('user').order_by('joined_at')
    return Response(GroupMemberSerializer(members, many=True).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def group_member_add(request):
    """Add a profile to a group (group admins only)"""
    serializer = GroupMemberSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_data_response('Invalid group member data', serializer.errors)

    group, _ = get_group_for_admin(request, serializer.validated_data['group'].pk)
    member = serializer.save()
    logger.info(f"Profile {member.user_id} added to group {group.id} by {request.user.username}")
    create_audit_log(request=request, action='member_add', model_name='GroupMember',
                     object_id=member.id, object_name=str(member),
                     changes={'group': str(group.id), 'user': str(member.user_id), 'is_admin': member.is_admin})
    return Response(GroupMemberSerializer(member).data, status=status.HTTP_201_CREATED)


@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def group_member_detail(request, group_id, user_id):
    """Change a member's admin flag or remove the membership"""
    group = get_object_or_404(ChatGroup.objects.select_related('business'), pk=group_id)
    profile = get_request_profile(request)

    if request.method == 'DELETE':
        removing_self = profile.pk == user_id
        if not removing_self and not can_manage_group(request, group, profile):
            raise PermissionDenied('Only group admins can remove other members')
        deleted, _ = GroupMember.objects.filter(group=group, user_id=user_id).delete()
        if not deleted:
            return Response({'error': 'Group member not found'}, status=status.HTTP_404_NOT_FOUND)
        logger.info(f"Profile {user_id} removed from group {group.id} by {request.user.username}")
        create_audit_log(request=request, action='member_remove', model_name='GroupMember',
                         object_id=f"{group.id}:{user_id}", object_name=group.name,
                         changes={'group': str(group.id), 'user': str(user_id)})
        return Response(status=status.HTTP_204_NO_CONTENT)

    if not can_manage_group(request, group, profile):
        raise PermissionDenied('Only group admins can change member roles')
    member = get_object_or_404(GroupMember, group=group, user_id=user_id)
    data = {'is_admin': editable_request_data(request).get('is_admin')}
    serializer = GroupMemberSerializer(member, data=data, partial=True)
    if serializer.is_valid():
        serializer.save()
        create_audit_log(request=request, action='update', model_name='GroupMember',
                         object_id=member.id, object_name=str(member),
                         changes={'is_admin': member.is_admin})
        return Response(serializer.data)
    return invalid_data_response('Invalid group member data', serializer.errors)


# GroupInvitation views
@api_view(['GET'])
@permission_classes([AllowAny])
def invitation_by_code(request, code):
    """
    Preview an invitation before joining.

    Public so that invitees can see which group they are joining before they
    sign up.
    """
    invitation = get_object_or_404(
        GroupInvitation.objects.select_related('group__business'),
        invitation_code=code,
    )
    return Response(GroupInvitationSerializer(invitation).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def invitations_by_group(request, group_id):
    group, _ = get_group_for_admin(request, group_id)
    invitations = group.invitations.select_related('group__business')
    return Response(GroupInvitationSerializer(invitations, many=True).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def invitation_create(request):
    """Create a shareable invitation code (group admins only)"""
    serializer = GroupInvitationSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_data_response('Invalid invitation data', serializer.errors)

    group, profile = get_group_for_admin(request, serializer.validated_data['group'].pk)
    invitation = serializer.save(created_by=profile, invitation_code=generate_invitation_code())
    logger.info(f"Invitation {invitation.invitation_code} created for group {group.id} by {request.user.username}")
    create_audit_log(request=request, action='invitation_create', model_name='GroupInvitation',
                     object_id=invitation.id, object_name=group.name,
                     changes={'max_uses': invitation.max_uses,
                              'expires_at': invitation.expires_at.isoformat() if invitation.expires_at else None})
    return Response(GroupInvitationSerializer(invitation).data, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def invitation_deactivate(request, pk):
    invitation = get_object_or_404(GroupInvitation, pk=pk)
    group, _ = get_group_for_admin(request, invitation.group_id)
    invitation.is_active = False
    invitation.save(update_fields=['is_active'])
    logger.info(f"Invitation {invitation.invitation_code} deactivated by {request.user.username}")
    create_audit_log(request=request, action='invitation_deactivate', model_name='GroupInvitation',
                     object_id=invitation.id, object_name=group.name)
    return Response(GroupInvitationSerializer(invitation).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def invitation_accept(request, code):
    """Join the group behind an invitation code"""
    profile = get_request_profile(request)
    invitation, member, already_member = accept_invitation(code, profile)
    if not already_member:
        create_audit_log(request=request, action='invitation_accept', model_name='GroupInvitation',
                         object_id=invitation.id, object_name=invitation.group.name,
                         changes={'user': str(profile.pk), 'current_uses': invitation.current_uses})
    return Response({
        'already_member': already_member,
        'group_id': str(invitation.group_id),
        'member': GroupMemberSerializer(member).data,
    }, status=status.HTTP_200_OK if already_member else status.HTTP_201_CREATED)


# ChatMessage views
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def chat_messages_list(request, group_id):
    """
    Messages of a group, returned oldest first.

    Query params:
    - limit: number of messages (default 50, capped)
    - after: ISO timestamp; the oldest `limit` messages created after it are returned,
      without it the newest `limit` messages are returned
    """
    group, _ = get_group_for_member(request, group_id)

    try:
        limit = int(request.query_params.get('limit', settings.CHAT_MESSAGES_DEFAULT_LIMIT))
    except (TypeError, ValueError):
        return invalid_data_response('Invalid limit', {'limit': ['Must be an integer']})
    limit = max(1, min(limit, settings.CHAT_MESSAGES_MAX_LIMIT))

    messages = ChatMessage.objects.filter(group=group).select_related('user')
    after = request.query_params.get('after')
    if after:
        after_dt = parse_datetime(after.replace(' ', '+'))
        if after_dt is None:
            return invalid_data_response('Invalid after timestamp', {'after': ['Must be an ISO 8601 timestamp']})
        # Polling: oldest first past the cursor so no message is skipped
        page = messages.filter(created_at__gt=after_dt).order_by('created_at')[:limit]
        return Response(ChatMessageSerializer(page, many=True).data)

    newest = list(messages.order_by('-created_at')[:limit])
    newest.reverse()
    return Response(ChatMessageSerializer(newest, many=True).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def chat_message_create(request):
    serializer = ChatMessageSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_data_response('Invalid message data', serializer.errors)

    group = serializer.validated_data['group']
    profile = get_request_profile(request)
    require_membership(group, profile)
    message = serializer.save(user=profile)
    logger.debug(f"Message {message.id} posted to group {group.id} by {request.user.username}")
    return Response(ChatMessageSerializer(message).data, status=status.HTTP_201_CREATED)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def chat_message_update(request, pk):
    """Edit the content of one's own message"""
    message = get_object_or_404(ChatMessage.objects.select_related('user', 'group'), pk=pk)
    if message.user_id != request.user.pk:
        raise PermissionDenied('You can only edit your own messages')
    require_membership(message.group, get_request_profile(request))

    serializer = ChatMessageUpdateSerializer(message, data=request.data, partial=True)
    if serializer.is_valid():
        serializer.save()
        return Response(serializer.data)
    return invalid_data_response('Invalid message data', serializer.errors)


# TypingIndicator views
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def typing_indicators_list(request, group_id):
    """Who else is typing in a group right now"""
    group, profile = get_group_for_member(request, group_id)
    indicators = (TypingIndicator.objects.active()
                  .filter(group=group)
                  .exclude(user=profile)
                  .select_related('user'))
    return Response(TypingIndicatorSerializer(indicators, many=True).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def typing_indicator_upsert(request):
    serializer = TypingIndicatorSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_data_response('Invalid typing indicator data', serializer.errors)

    group = serializer.validated_data['group']
    profile = get_request_profile(request)
    require_membership(group, profile)
    indicator = touch_typing_indicator(group, profile)
    return Response(TypingIndicatorSerializer(indicator).data)


@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def typing_indicator_clear(request, group_id, user_id):
    if user_id != request.user.pk and not request.user.is_staff:
        raise PermissionDenied('You can only clear your own typing indicator')
    TypingIndicator.objects.filter(group_id=group_id, user_id=user_id).delete()
    return Response(status=status.HTTP_204_NO_CONTENT)
