"""
Test suite for website builder records
"""
from django.test import TestCase
from rest_framework import status
from bizos.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from bizos.websites.models import Website


class WebsiteTests(TestCase):
    """Website endpoints"""

    def setUp(self):
        self.owner = TestDataFactory.create_user()
        self.business = TestDataFactory.create_business(self.owner)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.owner)

    def test_create_website(self):
        response = self.client.post('/api/websites/', {
            'business': str(self.business.id),
            'name': 'Main site',
            'template': 'restaurant',
            'title': 'Trattoria',
            'description': 'Family kitchen',
            'content': 'Open daily',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['template'], 'restaurant')

    def test_template_must_be_known(self):
        response = self.client.post('/api/websites/', {
            'business': str(self.business.id),
            'name': 'Odd site',
            'template': 'brutalist',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('template', response.data['details'])

    def test_list_filter_by_template(self):
        TestDataFactory.create_website(self.business, name='Shop', template='ecommerce')
        TestDataFactory.create_website(self.business, name='Folio', template='portfolio')
        response = self.client.get(f'/api/websites/business/{self.business.id}/', {'template': 'portfolio'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row['name'] for row in response.data], ['Folio'])

    def test_update_and_delete(self):
        website = TestDataFactory.create_website(self.business)
        response = self.client.patch(f'/api/websites/{website.id}/', {'title': 'New title'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['title'], 'New title')

        response = self.client.delete(f'/api/websites/{website.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Website.objects.exists())

    def test_outsider_cannot_list(self):
        self.client.authenticate_user(TestDataFactory.create_user())
        response = self.client.get(f'/api/websites/business/{self.business.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
