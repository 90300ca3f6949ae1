"""
Test suite for business accounts and the tenant access rule
"""
import uuid

from django.test import TestCase
from rest_framework import status
from bizos.businesses.models import BusinessAccount
from bizos.businesses.permissions import user_can_access_business
from bizos.core.models import AuditLog
from bizos.core.test_utils import TestDataFactory, AuthenticatedAPIClient


class BusinessAccountTests(TestCase):
    """Business account endpoints"""

    def setUp(self):
        self.owner = TestDataFactory.create_user()
        self.other = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.owner)

    def test_create_defaults_owner_to_requester(self):
        response = self.client.post('/api/business-accounts/', {'name': 'Acme Ltd'})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['owner'], self.owner.pk)
        self.assertEqual(response.data['owner_name'], self.owner.profile.full_name)
        self.assertTrue(AuditLog.objects.filter(model_name='BusinessAccount', action='create').exists())

    def test_create_rejects_blank_name(self):
        response = self.client.post('/api/business-accounts/', {'name': '   '})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('name', response.data['details'])

    def test_create_for_someone_else_is_forbidden(self):
        response = self.client.post('/api/business-accounts/', {'name': 'Not mine', 'owner': str(self.other.pk)})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_by_owner_newest_first(self):
        first = TestDataFactory.create_business(self.owner, name='First')
        second = TestDataFactory.create_business(self.owner, name='Second')
        TestDataFactory.create_business(self.other, name='Foreign')
        response = self.client.get(f'/api/business-accounts/owner/{self.owner.pk}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row['id'] for row in response.data], [str(second.id), str(first.id)])

    def test_list_other_owner_is_forbidden(self):
        response = self.client.get(f'/api/business-accounts/owner/{self.other.pk}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_get_missing_business(self):
        response = self.client.get(f'/api/business-accounts/{uuid.uuid4()}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_update_keeps_owner(self):
        business = TestDataFactory.create_business(self.owner)
        response = self.client.patch(f'/api/business-accounts/{business.id}/', {
            'name': 'Renamed',
            'owner': str(self.other.pk),
        })
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        business.refresh_from_db()
        self.assertEqual(business.name, 'Renamed')
        self.assertEqual(business.owner_id, self.owner.pk)

    def test_member_can_read_but_not_modify(self):
        business = TestDataFactory.create_business(self.owner)
        group = TestDataFactory.create_group(business, self.owner)
        TestDataFactory.add_member(group, self.other)

        self.client.authenticate_user(self.other)
        response = self.client.get(f'/api/business-accounts/{business.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        response = self.client.patch(f'/api/business-accounts/{business.id}/', {'name': 'Taken over'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        response = self.client.delete(f'/api/business-accounts/{business.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_outsider_cannot_read(self):
        business = TestDataFactory.create_business(self.owner)
        self.client.authenticate_user(self.other)
        response = self.client.get(f'/api/business-accounts/{business.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['error'], 'You do not have access to this business')

    def test_delete_cascades_to_groups(self):
        business = TestDataFactory.create_business(self.owner)
        TestDataFactory.create_group(business, self.owner)
        response = self.client.delete(f'/api/business-accounts/{business.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(BusinessAccount.objects.filter(pk=business.id).exists())
        self.assertEqual(business.chat_groups.count(), 0)


class TenantAccessTests(TestCase):
    """user_can_access_business"""

    def test_owner_and_members_have_access(self):
        owner = TestDataFactory.create_user()
        member = TestDataFactory.create_user()
        outsider = TestDataFactory.create_user()
        business = TestDataFactory.create_business(owner)
        group = TestDataFactory.create_group(business, owner)
        TestDataFactory.add_member(group, member)

        self.assertTrue(user_can_access_business(owner.profile, business))
        self.assertTrue(user_can_access_business(member.profile, business))
        self.assertFalse(user_can_access_business(outsider.profile, business))
