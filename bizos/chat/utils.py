"""Group membership, invitation and typing helpers used by the chat views"""
import logging
import secrets
import string

from django.conf import settings
from django.db import transaction
from django.db.models import F
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status
from rest_framework.exceptions import APIException, PermissionDenied
from bizos.core.utils import get_request_profile
from .models import ChatGroup, GroupMember, GroupInvitation, TypingIndicator

logger = logging.getLogger('bizos.chat')

INVITATION_CODE_ALPHABET = string.ascii_letters + string.digits + '_-'


class InvitationInvalid(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid invitation link'
    default_code = 'invitation_invalid'


def generate_invitation_code(length=None):
    """Random URL-safe code, regenerated until it does not collide with an existing one"""
    length = length or settings.INVITATION_CODE_LENGTH
    while True:
        code = ''.join(secrets.choice(INVITATION_CODE_ALPHABET) for _ in range(length))
        if not GroupInvitation.objects.filter(invitation_code=code).exists():
            return code


def can_manage_group(request, group, profile):
    if request.user.is_staff or group.business.owner_id == profile.pk:
        return True
    return group.is_admin(profile)


def get_group_for_member(request, group_id):
    """
    Fetch a group the requester can read.

    Members can read, and so can the owner of the group's business and staff.
    """
    group = get_object_or_404(ChatGroup.objects.select_related('business'), pk=group_id)
    profile = get_request_profile(request)
    if request.user.is_staff or group.business.owner_id == profile.pk or group.is_member(profile):
        return group, profile
    logger.warning(f"User {request.user.username} denied access to chat group {group_id}")
    raise PermissionDenied('You are not a member of this group')


def get_group_for_admin(request, group_id):
    group = get_object_or_404(ChatGroup.objects.select_related('business'), pk=group_id)
    profile = get_request_profile(request)
    if not can_manage_group(request, group, profile):
        logger.warning(f"User {request.user.username} attempted to manage chat group {group_id} without admin rights")
        raise PermissionDenied('Only group admins can perform this action')
    return group, profile


def require_membership(group, profile):
    """Posting and typing are reserved for actual members"""
    if not group.is_member(profile):
        raise PermissionDenied('You are not a member of this group')


def create_group_with_admin(business, profile, name, description=None):
    """Create a group and make its creator the first admin member"""
    with transaction.atomic():
        group = ChatGroup.objects.create(
            business=business,
            name=name,
            description=description,
            created_by=profile,
        )
        GroupMember.objects.create(group=group, user=profile, is_admin=True)
    return group


def accept_invitation(invitation_code, profile):
    """
    Join the invited group.

    Returns (invitation, member, already_member). A profile that is already a
    member does not consume a use.
    """
    with transaction.atomic():
        invitation = get_object_or_404(
            GroupInvitation.objects.select_for_update(),
            invitation_code=invitation_code,
        )
        reason = invitation.invalid_reason()
        if reason:
            raise InvitationInvalid(reason)

        existing = GroupMember.objects.filter(group_id=invitation.group_id, user=profile).first()
        if existing is not None:
            return invitation, existing, True

        member = GroupMember.objects.create(group_id=invitation.group_id, user=profile, is_admin=False)
        GroupInvitation.objects.filter(pk=invitation.pk).update(current_uses=F('current_uses') + 1)
        invitation.refresh_from_db()

    logger.info(f"Profile {profile.pk} joined group {invitation.group_id} via invitation {invitation.invitation_code}")
    return invitation, member, False


def touch_typing_indicator(group, profile):
    """Insert or refresh the requester's typing row"""
    indicator, _ = TypingIndicator.objects.update_or_create(
        group=group,
        user=profile,
        defaults={'last_typing': timezone.now()},
    )
    return indicator
