"""
Test suite for dashboard KPIs and their cache
"""
from decimal import Decimal

from django.core.cache import cache
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from bizos.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from bizos.dashboard.cache import dashboard_cache_key


class DashboardTests(TestCase):
    """Dashboard endpoint"""

    def setUp(self):
        cache.clear()
        self.owner = TestDataFactory.create_user()
        self.business = TestDataFactory.create_business(self.owner)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.owner)
        self.url = f'/api/dashboard/{self.business.id}/'

    def test_combined_kpis(self):
        today = timezone.localdate()
        TestDataFactory.create_transaction(self.business, amount=Decimal('300.00'), type='income', date=today)
        TestDataFactory.create_transaction(self.business, amount=Decimal('100.00'), type='expense', date=today)
        TestDataFactory.create_contact(self.business, status='customer', value=Decimal('40.00'))
        TestDataFactory.create_contact(self.business, status='lead')
        TestDataFactory.create_document(self.business)
        TestDataFactory.create_group(self.business, self.owner)

        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data
        self.assertEqual(data['total_income'], 300.0)
        self.assertEqual(data['total_expenses'], 100.0)
        self.assertEqual(data['net_profit'], 200.0)
        self.assertEqual(data['customer_count'], 1)
        self.assertEqual(data['lead_count'], 1)
        self.assertEqual(data['prospect_count'], 0)
        self.assertEqual(data['total_customer_value'], 40.0)
        self.assertEqual(data['document_count'], 1)
        self.assertEqual(data['group_count'], 1)
        self.assertEqual(data['image_count'], 0)
        self.assertEqual(len(data['monthly_data']), 6)
        self.assertEqual([s['name'] for s in data['customer_segments']], ['Customers', 'Leads', 'Prospects'])
        self.assertEqual([s['value'] for s in data['customer_segments']], [1, 1, 0])

    def test_response_is_cached(self):
        self.client.get(self.url)
        self.assertIsNotNone(cache.get(dashboard_cache_key(self.business.id)))

        # Overwrite the entry to show the view reads from cache
        cache.set(dashboard_cache_key(self.business.id), {'document_count': 99})
        response = self.client.get(self.url)
        self.assertEqual(response.data, {'document_count': 99})

    def test_writes_invalidate_cache(self):
        self.client.get(self.url)
        with self.captureOnCommitCallbacks(execute=True):
            TestDataFactory.create_document(self.business)
        self.assertIsNone(cache.get(dashboard_cache_key(self.business.id)))

        response = self.client.get(self.url)
        self.assertEqual(response.data['document_count'], 1)

    def test_delete_invalidates_cache(self):
        contact = TestDataFactory.create_contact(self.business, status='customer')
        self.client.get(self.url)
        with self.captureOnCommitCallbacks(execute=True):
            contact.delete()
        response = self.client.get(self.url)
        self.assertEqual(response.data['customer_count'], 0)

    def test_other_business_cache_untouched(self):
        other = TestDataFactory.create_business(self.owner)
        self.client.get(self.url)
        with self.captureOnCommitCallbacks(execute=True):
            TestDataFactory.create_transaction(other)
        self.assertIsNotNone(cache.get(dashboard_cache_key(self.business.id)))

    def test_outsider_forbidden(self):
        self.client.authenticate_user(TestDataFactory.create_user())
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
