"""
Test suite for the knowledge base
"""
from django.test import TestCase
from rest_framework import status
from bizos.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from bizos.knowledge.models import Document


class DocumentTests(TestCase):
    """Document endpoints"""

    def setUp(self):
        self.owner = TestDataFactory.create_user(full_name='Doc Author')
        self.business = TestDataFactory.create_business(self.owner)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.owner)

    def test_create_document(self):
        response = self.client.post('/api/documents/', {
            'business': str(self.business.id),
            'title': 'Onboarding',
            'content': 'Welcome aboard',
            'tags': [' hr ', 'process', 'hr'],
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['tags'], ['hr', 'process'])
        self.assertEqual(response.data['created_by_name'], 'Doc Author')

    def test_tags_must_be_non_empty_strings(self):
        response = self.client.post('/api/documents/', {
            'business': str(self.business.id),
            'title': 'Bad tags',
            'tags': ['ok', '  '],
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('tags', response.data['details'])

    def test_tags_must_be_a_list(self):
        response = self.client.post('/api/documents/', {
            'business': str(self.business.id),
            'title': 'Bad tags',
            'tags': 'hr',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_filter_by_tag_and_search(self):
        TestDataFactory.create_document(self.business, title='Handbook', tags=['hr', 'policy'])
        TestDataFactory.create_document(self.business, title='Pricing', content='Price list', tags=['sales'])
        TestDataFactory.create_document(self.business, title='Shredding', tags=['hrs'])
        url = f'/api/documents/business/{self.business.id}/'

        response = self.client.get(url, {'tag': 'hr'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row['title'] for row in response.data], ['Handbook'])

        response = self.client.get(url, {'search': 'price'})
        self.assertEqual([row['title'] for row in response.data], ['Pricing'])

    def test_update_document(self):
        document = TestDataFactory.create_document(self.business, title='Draft', tags=['wip'])
        response = self.client.put(f'/api/documents/{document.id}/', {
            'title': 'Final',
            'content': 'Done',
            'tags': [],
        })
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        document.refresh_from_db()
        self.assertEqual(document.title, 'Final')
        self.assertEqual(document.tags, [])

    def test_delete_document(self):
        document = TestDataFactory.create_document(self.business)
        response = self.client.delete(f'/api/documents/{document.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Document.objects.exists())
