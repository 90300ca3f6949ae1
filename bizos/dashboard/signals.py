"""
Cache invalidation signals.

Any write to a row that feeds the dashboard drops that business's cached KPIs
once the surrounding transaction commits.
"""
from django.db import transaction
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
from bizos.accounting.models import Transaction
from bizos.crm.models import Contact
from bizos.knowledge.models import Document
from bizos.websites.models import Website
from bizos.studio.models import GeneratedImage
from bizos.chat.models import ChatGroup
from .cache import invalidate_dashboard_cache

DASHBOARD_SOURCES = (Transaction, Contact, Document, Website, GeneratedImage, ChatGroup)


@receiver([post_save, post_delete])
def invalidate_dashboard_on_change(sender, instance, **kwargs):
    if sender not in DASHBOARD_SOURCES:
        return
    business_id = instance.business_id
    transaction.on_commit(lambda: invalidate_dashboard_cache(business_id))
