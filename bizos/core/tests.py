"""
Test suite for auth, profiles, audit logs and the API error shape
"""
import uuid
from unittest.mock import patch

from django.db import DatabaseError
from django.test import TestCase
from rest_framework import status
from bizos.businesses.models import BusinessAccount
from bizos.core.models import Profile, AuditLog
from bizos.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from bizos.core.utils import create_audit_log


class AuthTests(TestCase):
    """Registration, login and current-user endpoints"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()

    def test_register_creates_user_and_profile(self):
        response = self.client.post('/api/auth/register/', {
            'username': 'owner1',
            'email': 'owner1@test.com',
            'password': 'Str0ng-pass-123',
            'password_confirm': 'Str0ng-pass-123',
            'full_name': 'Owner One',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIn('access', response.data)
        self.assertIn('refresh', response.data)
        self.assertEqual(response.data['profile']['full_name'], 'Owner One')
        self.assertEqual(response.data['profile']['role'], 'business_owner')
        profile = Profile.objects.get(email='owner1@test.com')
        self.assertEqual(str(profile.pk), response.data['user']['id'])

    def test_register_password_mismatch(self):
        response = self.client.post('/api/auth/register/', {
            'username': 'owner2',
            'email': 'owner2@test.com',
            'password': 'Str0ng-pass-123',
            'password_confirm': 'different-pass-123',
            'full_name': 'Owner Two',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Invalid registration data')
        self.assertIn('password', response.data['details'])

    def test_login_returns_token_pair(self):
        TestDataFactory.create_user(username='loginuser', password='testpass123')
        response = self.client.post('/api/auth/login/', {'username': 'loginuser', 'password': 'testpass123'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)
        self.assertIn('refresh', response.data)

    def test_login_rejects_disabled_user(self):
        user = TestDataFactory.create_user(username='disabled', password='testpass123')
        user.is_active = False
        user.save()
        response = self.client.post('/api/auth/login/', {'username': 'disabled', 'password': 'testpass123'})
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertIn('error', response.data)

    def test_me_requires_authentication(self):
        response = self.client.get('/api/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertIn('error', response.data)

    def test_me_returns_profile(self):
        user = TestDataFactory.create_user(full_name='Me Myself')
        self.client.authenticate_user(user)
        response = self.client.get('/api/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['username'], user.username)
        self.assertEqual(response.data['profile']['full_name'], 'Me Myself')

    def test_me_creates_missing_profile(self):
        user = TestDataFactory.create_user(with_profile=False)
        self.client.authenticate_user(user)
        response = self.client.get('/api/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(Profile.objects.filter(user=user).exists())


class ProfileTests(TestCase):
    """Profile CRUD endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user(full_name='Jane Doe')
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_get_profile(self):
        response = self.client.get(f'/api/profiles/{self.user.pk}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['id'], str(self.user.pk))
        self.assertEqual(response.data['full_name'], 'Jane Doe')

    def test_get_missing_profile(self):
        response = self.client.get(f'/api/profiles/{uuid.uuid4()}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertIn('error', response.data)

    def test_create_profile_for_existing_user(self):
        other = TestDataFactory.create_user(with_profile=False)
        response = self.client.post('/api/profiles/', {
            'id': str(other.pk),
            'email': other.email,
            'full_name': 'Other Person',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['full_name'], 'Other Person')
        self.assertEqual(response.data['role'], 'business_manager')

    def test_create_duplicate_profile(self):
        response = self.client.post('/api/profiles/', {'id': str(self.user.pk), 'full_name': 'Again'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('id', response.data['details'])

    def test_put_is_partial(self):
        response = self.client.put(f'/api/profiles/{self.user.pk}/', {'avatar_url': 'https://cdn.test/a.png'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['avatar_url'], 'https://cdn.test/a.png')
        self.assertEqual(response.data['full_name'], 'Jane Doe')

    def test_cannot_update_other_profile(self):
        other = TestDataFactory.create_user()
        response = self.client.patch(f'/api/profiles/{other.pk}/', {'full_name': 'Hijacked'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        other.profile.refresh_from_db()
        self.assertNotEqual(other.profile.full_name, 'Hijacked')

    def test_update_missing_profile(self):
        response = self.client.patch(f'/api/profiles/{uuid.uuid4()}/', {'full_name': 'Nobody'})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_profile_by_email(self):
        response = self.client.get('/api/profiles/by-email/', {'email': self.user.email.upper()})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['id'], str(self.user.pk))

    def test_profile_by_email_missing(self):
        response = self.client.get('/api/profiles/by-email/', {'email': 'nobody@test.com'})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        response = self.client.get('/api/profiles/by-email/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class AuditLogTests(TestCase):
    """Audit log helper and staff-only listing"""

    def setUp(self):
        self.staff = TestDataFactory.create_user(is_staff=True)
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()

    def test_create_audit_log_skips_incomplete_entries(self):
        self.assertIsNone(create_audit_log(action='create', model_name='ChatGroup'))
        self.assertEqual(AuditLog.objects.count(), 0)

    def test_list_requires_staff(self):
        self.client.authenticate_user(self.user)
        response = self.client.get('/api/audit-logs/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_filters_by_action(self):
        create_audit_log(action='member_add', model_name='GroupMember', object_id='1', user=self.user)
        create_audit_log(action='delete', model_name='Contact', object_id='2', user=self.user)
        self.client.authenticate_user(self.staff)
        response = self.client.get('/api/audit-logs/', {'action': 'member_add'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['model_name'], 'GroupMember')
        self.assertEqual(response.data[0]['username'], self.user.username)

    def test_long_object_name_is_truncated(self):
        entry = create_audit_log(action='create', model_name='GroupMember', object_id='1',
                                 user=self.user, object_name='x' * 400)
        self.assertEqual(len(entry.object_name), 255)

    def test_audit_failure_does_not_fail_the_write(self):
        self.client.authenticate_user(self.user)
        with patch.object(AuditLog.objects, 'create', side_effect=DatabaseError('audit table unavailable')):
            self.assertIsNone(create_audit_log(action='create', model_name='Contact', object_id='1', user=self.user))
            response = self.client.post('/api/business-accounts/', {'name': 'Still Created'})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(BusinessAccount.objects.filter(name='Still Created').exists())
        self.assertEqual(AuditLog.objects.count(), 0)
