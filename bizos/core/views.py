import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, IsAdminUser, AllowAny
from rest_framework.exceptions import PermissionDenied
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer, TokenRefreshSerializer
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken, TokenError
from django.contrib.auth import get_user_model
from django.core.exceptions import ObjectDoesNotExist
from django.db import transaction
from django.shortcuts import get_object_or_404
from .models import Profile, AuditLog
from .serializers import (
    UserSerializer, UserCreateSerializer,
    ProfileSerializer, ProfileCreateSerializer,
    AuditLogSerializer
)
from .utils import get_request_profile, invalid_data_response

User = get_user_model()

logger = logging.getLogger('bizos.core')


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    def validate(self, attrs):
        data = super().validate(attrs)
        if not self.user.is_active:
            raise AuthenticationFailed('User account is disabled.')
        return data

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token['username'] = user.username
        profile = getattr(user, 'profile', None)
        token['role'] = profile.role if profile else None
        token['full_name'] = profile.full_name if profile else None
        return token


class CustomTokenObtainPairView(TokenObtainPairView):
    serializer_class = CustomTokenObtainPairSerializer


class CustomTokenRefreshSerializer(TokenRefreshSerializer):
    """Token refresh that reports deleted users as an invalid token"""
    def validate(self, attrs):
        try:
            return super().validate(attrs)
        except (InvalidToken, TokenError):
            raise InvalidToken('Token is invalid or expired.')
        except ObjectDoesNotExist:
            raise InvalidToken('Token is invalid. User no longer exists.')


class CustomTokenRefreshView(TokenRefreshView):
    serializer_class = CustomTokenRefreshSerializer


@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """User registration endpoint; creates the user together with its profile"""
    serializer = UserCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_data_response('Invalid registration data', serializer.errors)

    with transaction.atomic():
        user = serializer.save()
    logger.info(f"Registered user {user.username} ({user.profile.role})")

    token = CustomTokenObtainPairSerializer.get_token(user)
    return Response({
        'user': UserSerializer(user).data,
        'profile': ProfileSerializer(user.profile).data,
        'access': str(token.access_token),
        'refresh': str(token),
    }, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def user_me(request):
    """Get current user with profile"""
    profile = get_request_profile(request)
    user_data = UserSerializer(request.user).data
    user_data['profile'] = ProfileSerializer(profile).data
    return Response(user_data)


# Profile views
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def profile_create(request):
    """Create a profile for an existing user"""
    serializer = ProfileCreateSerializer(data=request.data)
    if serializer.is_valid():
        profile = serializer.save()
        logger.info(f"Profile created for user {profile.user_id}")
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return invalid_data_response('Invalid profile data', serializer.errors)


@api_view(['GET', 'PUT', 'PATCH'])
@permission_classes([IsAuthenticated])
def profile_detail(request, pk):
    """Retrieve or update a profile"""
    profile = get_object_or_404(Profile, pk=pk)

    if request.method == 'GET':
        serializer = ProfileSerializer(profile)
        return Response(serializer.data)

    if profile.user_id != request.user.pk and not request.user.is_staff:
        raise PermissionDenied('You can only update your own profile')

    # PUT is a partial update too: omitted fields are kept
    serializer = ProfileSerializer(profile, data=request.data, partial=True)
    if serializer.is_valid():
        serializer.save()
        return Response(serializer.data)
    return invalid_data_response('Invalid profile data', serializer.errors)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def profile_by_email(request):
    """Look up a profile by email address"""
    email = request.query_params.get('email', '').strip()
    if not email:
        return Response({'error': 'email query parameter is required'}, status=status.HTTP_400_BAD_REQUEST)
    profile = Profile.objects.filter(email__iexact=email).first()
    if profile is None:
        return Response({'error': 'Profile not found'}, status=status.HTTP_404_NOT_FOUND)
    return Response(ProfileSerializer(profile).data)


# AuditLog views
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminUser])
def audit_log_list(request):
    """List audit logs (staff only)"""
    queryset = AuditLog.objects.select_related('user').all()
    action = request.query_params.get('action', None)
    model_name = request.query_params.get('model_name', None)
    if action:
        queryset = queryset.filter(action=action)
    if model_name:
        queryset = queryset.filter(model_name=model_name)
    try:
        limit = min(max(int(request.query_params.get('limit', 100)), 1), 500)
    except (TypeError, ValueError):
        return Response({'error': 'limit must be an integer'}, status=status.HTTP_400_BAD_REQUEST)
    serializer = AuditLogSerializer(queryset[:limit], many=True)
    return Response(serializer.data)
