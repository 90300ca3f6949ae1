"""
OpenAI image generation for the creative studio.

The provider returns a short-lived URL, so the image is downloaded and kept in
Django's default file storage unless GENERATED_IMAGES_PERSIST is disabled.
"""
import logging
import time

import requests
from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from rest_framework import status
from rest_framework.exceptions import APIException

logger = logging.getLogger('bizos.studio')

STYLE_PROMPTS = {
    'realistic': 'photorealistic, high quality, detailed',
    'illustration': 'digital illustration, artistic, stylized',
    'abstract': 'abstract art, creative, modern',
    'minimalist': 'minimalist design, clean, simple',
    'vintage': 'vintage style, retro, classic',
    'modern': 'modern design, contemporary, sleek',
}
DEFAULT_STYLE_PROMPT = 'high quality'


class ImageGenerationError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Image generation failed'
    default_code = 'image_generation_failed'


def build_enhanced_prompt(prompt, style):
    return f"{prompt}, {STYLE_PROMPTS.get(style, DEFAULT_STYLE_PROMPT)}"


def request_image_url(prompt):
    """Ask the provider for one image and return its URL"""
    if not settings.OPENAI_API_KEY:
        raise ImageGenerationError('OpenAI API key not configured')

    headers = {
        'Authorization': f'Bearer {settings.OPENAI_API_KEY}',
        'Content-Type': 'application/json',
    }
    payload = {
        'model': settings.OPENAI_IMAGE_MODEL,
        'prompt': prompt,
        'n': 1,
        'size': settings.OPENAI_IMAGE_SIZE,
        'quality': settings.OPENAI_IMAGE_QUALITY,
    }

    try:
        response = requests.post(
            f"{settings.OPENAI_API_BASE.rstrip('/')}/images/generations",
            json=payload,
            headers=headers,
            timeout=settings.OPENAI_TIMEOUT_SECONDS,
        )
    except requests.exceptions.RequestException as e:
        logger.error(f"OpenAI request failed: {str(e)}")
        raise ImageGenerationError(f'OpenAI API request failed: {str(e)}')

    if not response.ok:
        logger.error(f"OpenAI API error: {response.status_code} {response.text}")
        raise ImageGenerationError(f'OpenAI API error: {response.status_code} {response.reason}')

    try:
        return response.json()['data'][0]['url']
    except (ValueError, KeyError, IndexError, TypeError):
        raise ImageGenerationError('Invalid response from OpenAI API')


def download_image(image_url):
    try:
        response = requests.get(image_url, timeout=settings.OPENAI_TIMEOUT_SECONDS)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        logger.error(f"Failed to download generated image from {image_url}: {str(e)}")
        raise ImageGenerationError('Failed to download generated image')
    return response.content


def generate_image(business_id, prompt, style):
    """
    Generate an image and store it.

    Returns a dict with image_url and storage_path ready to be saved on a
    GeneratedImage row. image_url is a storage URL (relative when the storage
    serves from MEDIA_URL) or the provider URL when persistence is off.
    """
    enhanced_prompt = build_enhanced_prompt(prompt, style)
    logger.info(f"Generating image for business {business_id} with prompt: {enhanced_prompt}")
    provider_url = request_image_url(enhanced_prompt)

    timestamp = int(time.time() * 1000)
    if not settings.GENERATED_IMAGES_PERSIST:
        return {'image_url': provider_url, 'storage_path': f'temp/{timestamp}.png'}

    content = download_image(provider_url)
    storage_path = default_storage.save(
        f'business-{business_id}/generated-image-{timestamp}.png',
        ContentFile(content),
    )
    logger.info(f"Stored generated image at {storage_path}")
    return {'image_url': default_storage.url(storage_path), 'storage_path': storage_path}


def delete_stored_image(storage_path):
    """Remove a stored image file; paths that were never persisted are ignored"""
    if not storage_path or storage_path.startswith('temp/'):
        return False
    try:
        if default_storage.exists(storage_path):
            default_storage.delete(storage_path)
            return True
    except OSError as e:
        logger.warning(f"Failed to delete stored image {storage_path}: {str(e)}")
    return False
