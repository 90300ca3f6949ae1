"""Request helpers and audit logging shared by every app"""
import logging

from django.db import transaction
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from .models import AuditLog, Profile

logger = logging.getLogger('bizos.core')

OBJECT_NAME_MAX_LENGTH = AuditLog._meta.get_field('object_name').max_length


def get_client_ip(request):
    """Extract client IP address from request"""
    if not request or not hasattr(request, 'META'):
        return None
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        ip = x_forwarded_for.split(',')[0].strip()
    else:
        ip = request.META.get('REMOTE_ADDR')
    return ip or None


def get_request_profile(request):
    """
    Profile of the authenticated user.

    Users created outside the register endpoint (admin, shell) get their
    profile on first use.
    """
    user = request.user
    profile, created = Profile.objects.get_or_create(
        user=user,
        defaults={
            'email': user.email or None,
            'full_name': user.get_full_name() or user.username,
        },
    )
    if created:
        logger.info(f"Created missing profile for user {user.username}")
    return profile


def invalid_data_response(message, errors):
    """400 response carrying serializer errors"""
    return Response({'error': message, 'details': errors}, status=status.HTTP_400_BAD_REQUEST)


def editable_request_data(request):
    """Mutable copy of the request body, which must be an object"""
    if not isinstance(request.data, dict):
        raise ValidationError({'non_field_errors': ['Expected an object']})
    return request.data.copy()


def create_audit_log(request=None, action=None, model_name=None, object_id=None,
                     changes=None, user=None, object_name=None):
    """
    Create an audit log entry

    Args:
        request: Django request object (for user and IP) - optional if user is provided
        action: Action type (create, member_add, invitation_accept, etc.)
        model_name: Name of the model being acted upon
        object_id: ID of the object
        changes: Dictionary of changes made
        user: Optional user override (defaults to request.user if request provided)
        object_name: Human-readable name of the object
    """
    if not action or not model_name or not object_id:
        logger.warning(f"Audit log creation skipped: missing required fields (action={action}, model_name={model_name}, object_id={object_id})")
        return None

    audit_user = user
    if audit_user is None and request is not None and hasattr(request, 'user'):
        audit_user = request.user

    if object_name:
        object_name = str(object_name)[:OBJECT_NAME_MAX_LENGTH]

    try:
        # Savepoint so a failed insert leaves any enclosing transaction usable
        with transaction.atomic():
            return AuditLog.objects.create(
                user=audit_user if audit_user and audit_user.is_authenticated else None,
                action=action,
                model_name=model_name,
                object_id=str(object_id),
                object_name=object_name,
                changes=changes or {},
                ip_address=get_client_ip(request) if request else None,
            )
    except Exception as e:
        # Don't fail the main operation if audit logging fails
        logger.error(f"Failed to create audit log for {model_name} {object_id}: {str(e)}", exc_info=True)
        return None
