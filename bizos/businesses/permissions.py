"""Tenant access rules shared by every business-scoped endpoint"""
import logging
from django.shortcuts import get_object_or_404
from rest_framework.exceptions import PermissionDenied
from bizos.core.utils import get_request_profile
from .models import BusinessAccount

logger = logging.getLogger('bizos.businesses')


def user_can_access_business(profile, business):
    """
    Owners always have access; everybody else needs membership in at least
    one of the business's chat groups.
    """
    if business.owner_id == profile.pk:
        return True
    return business.chat_groups.filter(members__user=profile).exists()


def get_accessible_business(request, business_id):
    """Fetch a business the requester may read, 404 when missing and 403 when foreign"""
    business = get_object_or_404(BusinessAccount, pk=business_id)
    if request.user.is_staff:
        return business
    profile = get_request_profile(request)
    if not user_can_access_business(profile, business):
        logger.warning(f"User {request.user.username} denied access to business {business_id}")
        raise PermissionDenied('You do not have access to this business')
    return business


def get_owned_business(request, business_id):
    """Fetch a business the requester owns"""
    business = get_object_or_404(BusinessAccount, pk=business_id)
    if request.user.is_staff:
        return business
    if business.owner_id != request.user.pk:
        logger.warning(f"User {request.user.username} attempted to modify business {business_id} without ownership")
        raise PermissionDenied('Only the business owner can perform this action')
    return business
