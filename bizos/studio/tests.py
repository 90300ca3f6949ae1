"""
Test suite for the creative studio
External calls to the image provider are mocked.
"""
import shutil
import tempfile
from unittest.mock import patch, MagicMock

import requests
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from django.test import TestCase, override_settings
from rest_framework import status
from bizos.core.models import AuditLog
from bizos.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from bizos.studio.image_service import build_enhanced_prompt
from bizos.studio.models import GeneratedImage

PROVIDER_URL = 'https://images.provider.test/generated/abc.png'
PNG_BYTES = b'\x89PNG\r\n\x1a\nfake-image-bytes'


def provider_response(status_code=200, payload=None, reason='OK'):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.reason = reason
    response.text = str(payload)
    response.json.return_value = payload if payload is not None else {'data': [{'url': PROVIDER_URL}]}
    return response


def download_response(content=PNG_BYTES):
    response = MagicMock()
    response.content = content
    response.raise_for_status.return_value = None
    return response


class PromptTests(TestCase):

    def test_known_styles(self):
        self.assertEqual(
            build_enhanced_prompt('A coffee cup', 'realistic'),
            'A coffee cup, photorealistic, high quality, detailed',
        )
        self.assertEqual(
            build_enhanced_prompt('A logo', 'minimalist'),
            'A logo, minimalist design, clean, simple',
        )

    def test_unknown_style_falls_back(self):
        self.assertEqual(build_enhanced_prompt('A logo', 'cubist'), 'A logo, high quality')


@override_settings(OPENAI_API_KEY='test-key', GENERATED_IMAGES_PERSIST=True)
class GenerateImageTests(TestCase):

    def setUp(self):
        self.media_root = tempfile.mkdtemp()
        self.media_override = override_settings(MEDIA_ROOT=self.media_root)
        self.media_override.enable()
        self.owner = TestDataFactory.create_user()
        self.business = TestDataFactory.create_business(self.owner)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.owner)

    def tearDown(self):
        self.media_override.disable()
        shutil.rmtree(self.media_root, ignore_errors=True)

    def generate(self, **overrides):
        body = {'prompt': 'A coffee cup', 'style': 'realistic', 'business_id': str(self.business.id)}
        body.update(overrides)
        return self.client.post('/api/generate-image/', body)

    @patch('bizos.studio.image_service.requests.get')
    @patch('bizos.studio.image_service.requests.post')
    def test_generate_stores_image(self, mock_post, mock_get):
        mock_post.return_value = provider_response()
        mock_get.return_value = download_response()

        response = self.generate()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        payload = mock_post.call_args.kwargs['json']
        self.assertEqual(payload['model'], 'dall-e-3')
        self.assertEqual(payload['n'], 1)
        self.assertEqual(payload['size'], '1024x1024')
        self.assertEqual(payload['quality'], 'standard')
        self.assertEqual(payload['prompt'], 'A coffee cup, photorealistic, high quality, detailed')
        self.assertEqual(mock_post.call_args.kwargs['headers']['Authorization'], 'Bearer test-key')
        mock_get.assert_called_once()

        storage_path = response.data['storage_path']
        self.assertTrue(storage_path.startswith(f'business-{self.business.id}/generated-image-'))
        self.assertTrue(storage_path.endswith('.png'))
        self.assertTrue(default_storage.exists(storage_path))
        self.assertEqual(response.data['prompt'], 'A coffee cup')
        self.assertEqual(GeneratedImage.objects.filter(business=self.business).count(), 1)
        self.assertTrue(AuditLog.objects.filter(action='image_generate').exists())

    @override_settings(GENERATED_IMAGES_PERSIST=False)
    @patch('bizos.studio.image_service.requests.get')
    @patch('bizos.studio.image_service.requests.post')
    def test_generate_without_persisting_keeps_provider_url(self, mock_post, mock_get):
        mock_post.return_value = provider_response()
        response = self.generate()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['image_url'], PROVIDER_URL)
        self.assertTrue(response.data['storage_path'].startswith('temp/'))
        mock_get.assert_not_called()

    def test_missing_fields(self):
        response = self.client.post('/api/generate-image/', {'prompt': 'A coffee cup'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('style', response.data['details'])
        self.assertIn('business_id', response.data['details'])

    @override_settings(OPENAI_API_KEY='')
    def test_missing_api_key(self):
        response = self.generate()
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data['error'], 'OpenAI API key not configured')
        self.assertFalse(GeneratedImage.objects.exists())

    @patch('bizos.studio.image_service.requests.post')
    def test_provider_error(self, mock_post):
        mock_post.return_value = provider_response(status_code=429, payload={'error': 'rate'}, reason='Too Many Requests')
        response = self.generate()
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data['error'], 'OpenAI API error: 429 Too Many Requests')

    @patch('bizos.studio.image_service.requests.post')
    def test_provider_unreachable(self, mock_post):
        mock_post.side_effect = requests.exceptions.ConnectionError('boom')
        response = self.generate()
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertTrue(response.data['error'].startswith('OpenAI API request failed'))

    @patch('bizos.studio.image_service.requests.post')
    def test_provider_returns_no_url(self, mock_post):
        mock_post.return_value = provider_response(payload={'data': []})
        response = self.generate()
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data['error'], 'Invalid response from OpenAI API')

    @patch('bizos.studio.image_service.requests.get')
    @patch('bizos.studio.image_service.requests.post')
    def test_download_failure(self, mock_post, mock_get):
        mock_post.return_value = provider_response()
        mock_get.side_effect = requests.exceptions.HTTPError('404')
        response = self.generate()
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data['error'], 'Failed to download generated image')

    def test_outsider_cannot_generate(self):
        outsider = TestDataFactory.create_user()
        self.client.authenticate_user(outsider)
        response = self.generate()
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class GeneratedImageGalleryTests(TestCase):

    def setUp(self):
        self.media_root = tempfile.mkdtemp()
        self.media_override = override_settings(MEDIA_ROOT=self.media_root)
        self.media_override.enable()
        self.owner = TestDataFactory.create_user()
        self.business = TestDataFactory.create_business(self.owner)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.owner)

    def tearDown(self):
        self.media_override.disable()
        shutil.rmtree(self.media_root, ignore_errors=True)

    def create_image(self, prompt='Prompt', storage_path='temp/1.png'):
        return GeneratedImage.objects.create(
            business=self.business,
            prompt=prompt,
            style='modern',
            image_url='https://images.provider.test/x.png',
            storage_path=storage_path,
        )

    def test_list_newest_first(self):
        first = self.create_image(prompt='first')
        second = self.create_image(prompt='second')
        response = self.client.get(f'/api/generated-images/{self.business.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row['id'] for row in response.data], [str(second.id), str(first.id)])

    def test_delete_removes_record_and_file(self):
        path = default_storage.save(f'business-{self.business.id}/generated-image-1.png', ContentFile(PNG_BYTES))
        image = self.create_image(storage_path=path)

        response = self.client.delete(f'/api/generated-images/item/{image.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(GeneratedImage.objects.filter(pk=image.id).exists())
        self.assertFalse(default_storage.exists(path))

    def test_delete_requires_access(self):
        image = self.create_image()
        self.client.authenticate_user(TestDataFactory.create_user())
        response = self.client.delete(f'/api/generated-images/item/{image.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(GeneratedImage.objects.filter(pk=image.id).exists())
