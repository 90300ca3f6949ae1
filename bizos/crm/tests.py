"""
Test suite for CRM contacts
"""
from decimal import Decimal

from django.test import TestCase
from rest_framework import status
from bizos.core.models import AuditLog
from bizos.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from bizos.crm.models import Contact


class ContactTests(TestCase):
    """Contact endpoints"""

    def setUp(self):
        self.owner = TestDataFactory.create_user()
        self.business = TestDataFactory.create_business(self.owner)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.owner)

    def test_create_contact(self):
        response = self.client.post('/api/contacts/', {
            'business': str(self.business.id),
            'name': 'Ada Lovelace',
            'email': 'ada@engines.test',
            'company': 'Analytical Engines',
            'status': 'prospect',
            'value': '5000.00',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'prospect')
        self.assertEqual(response.data['phone'], '')

    def test_name_and_email_required(self):
        response = self.client.post('/api/contacts/', {'business': str(self.business.id), 'name': ' '})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('name', response.data['details'])
        self.assertIn('email', response.data['details'])

    def test_invalid_status(self):
        response = self.client.post('/api/contacts/', {
            'business': str(self.business.id),
            'name': 'Bob',
            'email': 'bob@test.com',
            'status': 'vip',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('status', response.data['details'])

    def test_list_filters(self):
        TestDataFactory.create_contact(self.business, name='Alice', status='customer', company='Widgets')
        TestDataFactory.create_contact(self.business, name='Bob', status='lead')
        url = f'/api/contacts/business/{self.business.id}/'

        response = self.client.get(url)
        self.assertEqual(len(response.data), 2)
        response = self.client.get(url, {'status': 'customer'})
        self.assertEqual([row['name'] for row in response.data], ['Alice'])
        response = self.client.get(url, {'search': 'widg'})
        self.assertEqual([row['name'] for row in response.data], ['Alice'])

    def test_status_change_is_audited(self):
        contact = TestDataFactory.create_contact(self.business, status='lead')
        response = self.client.patch(f'/api/contacts/{contact.id}/', {'status': 'customer'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        log = AuditLog.objects.get(model_name='Contact', action='update')
        self.assertEqual(log.changes['status'], {'from': 'lead', 'to': 'customer'})

    def test_delete_contact(self):
        contact = TestDataFactory.create_contact(self.business)
        response = self.client.delete(f'/api/contacts/{contact.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Contact.objects.exists())

    def test_outsider_cannot_read_contact(self):
        contact = TestDataFactory.create_contact(self.business)
        self.client.authenticate_user(TestDataFactory.create_user())
        response = self.client.get(f'/api/contacts/{contact.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_summary(self):
        TestDataFactory.create_contact(self.business, status='customer', value=Decimal('1000.00'))
        TestDataFactory.create_contact(self.business, status='customer', value=Decimal('250.50'))
        TestDataFactory.create_contact(self.business, status='lead', value=Decimal('10.00'))
        TestDataFactory.create_contact(self.business, status='prospect')

        response = self.client.get(f'/api/contacts/business/{self.business.id}/summary/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {
            'customer_count': 2,
            'lead_count': 1,
            'prospect_count': 1,
            'total_value': 1260.5,
        })
