"""
Test suite for the accounting ledger
Tests: CRUD, filters, summary
"""
import uuid
from datetime import date, timedelta
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from bizos.accounting.models import Transaction
from bizos.accounting.summaries import month_starts, monthly_data
from bizos.core.test_utils import TestDataFactory, AuthenticatedAPIClient


class TransactionTests(TestCase):
    """Transaction endpoints"""

    def setUp(self):
        self.owner = TestDataFactory.create_user()
        self.business = TestDataFactory.create_business(self.owner)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.owner)

    def test_create_transaction(self):
        response = self.client.post('/api/transactions/', {
            'business': str(self.business.id),
            'date': '2024-03-15',
            'description': 'Consulting invoice',
            'amount': '1250.50',
            'type': 'income',
            'category': 'Services',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['amount'], '1250.50')
        self.assertEqual(response.data['created_by'], self.owner.pk)

    def test_amount_must_be_positive(self):
        for amount in ('0', '-10.00'):
            response = self.client.post('/api/transactions/', {
                'business': str(self.business.id),
                'date': '2024-03-15',
                'description': 'Bad amount',
                'amount': amount,
                'type': 'expense',
            })
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertIn('amount', response.data['details'])

    def test_invalid_type(self):
        response = self.client.post('/api/transactions/', {
            'business': str(self.business.id),
            'date': '2024-03-15',
            'description': 'Transfer',
            'amount': '10.00',
            'type': 'transfer',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('type', response.data['details'])

    def test_outsider_cannot_create(self):
        self.client.authenticate_user(TestDataFactory.create_user())
        response = self.client.post('/api/transactions/', {
            'business': str(self.business.id),
            'date': '2024-03-15',
            'description': 'Sneaky',
            'amount': '10.00',
            'type': 'income',
        })
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Transaction.objects.exists())

    def test_list_filters(self):
        TestDataFactory.create_transaction(self.business, type='income', category='Sales',
                                           date=date(2024, 1, 10), description='January sale')
        TestDataFactory.create_transaction(self.business, type='expense', category='Rent',
                                           date=date(2024, 2, 1), description='February rent')
        TestDataFactory.create_transaction(self.business, type='income', category='Sales',
                                           date=date(2024, 3, 5), description='March sale')
        url = f'/api/transactions/business/{self.business.id}/'

        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row['description'] for row in response.data],
                         ['March sale', 'February rent', 'January sale'])

        response = self.client.get(url, {'type': 'expense'})
        self.assertEqual([row['description'] for row in response.data], ['February rent'])

        response = self.client.get(url, {'category': 'sales', 'date_from': '2024-02-01'})
        self.assertEqual([row['description'] for row in response.data], ['March sale'])

        response = self.client.get(url, {'date_to': '2024-01-31'})
        self.assertEqual([row['description'] for row in response.data], ['January sale'])

        response = self.client.get(url, {'search': 'rent'})
        self.assertEqual(len(response.data), 1)

    def test_list_invalid_filter(self):
        response = self.client.get(f'/api/transactions/business/{self.business.id}/', {'date_from': 'soon'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_other_business_isolated(self):
        other_owner = TestDataFactory.create_user()
        other_business = TestDataFactory.create_business(other_owner)
        TestDataFactory.create_transaction(other_business)
        response = self.client.get(f'/api/transactions/business/{self.business.id}/')
        self.assertEqual(response.data, [])
        response = self.client.get(f'/api/transactions/business/{other_business.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_update_and_delete(self):
        transaction = TestDataFactory.create_transaction(self.business, amount=Decimal('50.00'))
        response = self.client.patch(f'/api/transactions/{transaction.id}/', {'amount': '75.00'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        transaction.refresh_from_db()
        self.assertEqual(transaction.amount, Decimal('75.00'))

        response = self.client.delete(f'/api/transactions/{transaction.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Transaction.objects.filter(pk=transaction.id).exists())

    def test_update_cannot_move_business(self):
        other_business = TestDataFactory.create_business(self.owner)
        transaction = TestDataFactory.create_transaction(self.business)
        response = self.client.patch(f'/api/transactions/{transaction.id}/', {'business': str(other_business.id)})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        transaction.refresh_from_db()
        self.assertEqual(transaction.business_id, self.business.id)

    def test_update_rejects_non_object_body(self):
        transaction = TestDataFactory.create_transaction(self.business, amount=Decimal('50.00'))
        response = self.client.patch(f'/api/transactions/{transaction.id}/', [{'amount': '75.00'}], format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Invalid request data')
        transaction.refresh_from_db()
        self.assertEqual(transaction.amount, Decimal('50.00'))

    def test_get_missing(self):
        response = self.client.get(f'/api/transactions/{uuid.uuid4()}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class TransactionSummaryTests(TestCase):

    def setUp(self):
        self.owner = TestDataFactory.create_user()
        self.business = TestDataFactory.create_business(self.owner)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.owner)

    def test_month_starts(self):
        starts = month_starts(date(2024, 2, 20))
        self.assertEqual(starts[0], date(2023, 9, 1))
        self.assertEqual(starts[-1], date(2024, 2, 1))
        self.assertEqual(len(starts), 6)

    def test_monthly_data_empty_without_transactions(self):
        self.assertEqual(monthly_data(self.business), [])

    def test_monthly_data_buckets(self):
        today = date(2024, 6, 15)
        TestDataFactory.create_transaction(self.business, amount=Decimal('100.00'), type='income', date=date(2024, 6, 1))
        TestDataFactory.create_transaction(self.business, amount=Decimal('40.00'), type='expense', date=date(2024, 6, 3))
        TestDataFactory.create_transaction(self.business, amount=Decimal('60.00'), type='income', date=date(2024, 1, 31))
        TestDataFactory.create_transaction(self.business, amount=Decimal('999.00'), type='income', date=date(2023, 12, 31))

        data = monthly_data(self.business, today=today)
        self.assertEqual([row['month'] for row in data], ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun'])
        self.assertEqual(data[0], {'month': 'Jan', 'revenue': 60.0, 'expenses': 0.0})
        self.assertEqual(data[-1], {'month': 'Jun', 'revenue': 100.0, 'expenses': 40.0})

    def test_summary_endpoint(self):
        today = timezone.localdate()
        TestDataFactory.create_transaction(self.business, amount=Decimal('500.00'), type='income', date=today)
        TestDataFactory.create_transaction(self.business, amount=Decimal('120.25'), type='expense', date=today)
        TestDataFactory.create_transaction(self.business, amount=Decimal('80.00'), type='expense',
                                           date=today - timedelta(days=400))

        response = self.client.get(f'/api/transactions/business/{self.business.id}/summary/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total_income'], 500.0)
        self.assertEqual(response.data['total_expenses'], 200.25)
        self.assertEqual(response.data['net_profit'], 299.75)
        self.assertEqual(len(response.data['monthly_data']), 6)
        self.assertEqual(response.data['monthly_data'][-1]['revenue'], 500.0)
        self.assertEqual(response.data['monthly_data'][-1]['expenses'], 120.25)

    def test_summary_without_transactions(self):
        response = self.client.get(f'/api/transactions/business/{self.business.id}/summary/')
        self.assertEqual(response.data['total_income'], 0.0)
        self.assertEqual(response.data['net_profit'], 0.0)
        self.assertEqual(response.data['monthly_data'], [])
