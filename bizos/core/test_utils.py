"""
Test utilities and factories for creating test data
"""
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from bizos.core.models import Profile
from bizos.businesses.models import BusinessAccount
from bizos.chat.models import ChatGroup, GroupMember, GroupInvitation, ChatMessage
from bizos.chat.utils import generate_invitation_code
from bizos.accounting.models import Transaction
from bizos.crm.models import Contact
from bizos.knowledge.models import Document
from bizos.websites.models import Website
from decimal import Decimal
from django.utils import timezone
import random
import string

User = get_user_model()


class TestDataFactory:
    """Factory class for creating test data"""

    @staticmethod
    def random_string(length=10):
        """Generate a random string"""
        return ''.join(random.choices(string.ascii_letters + string.digits, k=length))

    @staticmethod
    def create_user(username=None, email=None, password='testpass123', is_staff=False, is_superuser=False,
                    full_name=None, role='business_owner', with_profile=True):
        """Create a test user together with its profile"""
        if not username:
            username = f'testuser_{TestDataFactory.random_string(6)}'
        if not email:
            email = f'{username}@test.com'
        user = User.objects.create_user(
            username=username,
            email=email,
            password=password,
            is_staff=is_staff,
            is_superuser=is_superuser
        )
        if with_profile:
            Profile.objects.create(
                user=user,
                email=email,
                full_name=full_name or f'Test {username}',
                role=role,
            )
        return user

    @staticmethod
    def create_business(owner, name=None):
        """Create a business account owned by a user"""
        if not name:
            name = f'Business_{TestDataFactory.random_string(6)}'
        return BusinessAccount.objects.create(name=name, owner=owner.profile)

    @staticmethod
    def create_group(business, creator, name=None, description=None):
        """Create a chat group with its creator as admin member"""
        if not name:
            name = f'Group_{TestDataFactory.random_string(6)}'
        group = ChatGroup.objects.create(
            business=business,
            name=name,
            description=description,
            created_by=creator.profile,
        )
        GroupMember.objects.create(group=group, user=creator.profile, is_admin=True)
        return group

    @staticmethod
    def add_member(group, user, is_admin=False):
        return GroupMember.objects.create(group=group, user=user.profile, is_admin=is_admin)

    @staticmethod
    def create_invitation(group, creator, max_uses=None, expires_at=None, is_active=True, current_uses=0):
        """Create a group invitation with a fresh code"""
        return GroupInvitation.objects.create(
            group=group,
            created_by=creator.profile,
            invitation_code=generate_invitation_code(),
            max_uses=max_uses,
            expires_at=expires_at,
            is_active=is_active,
            current_uses=current_uses,
        )

    @staticmethod
    def create_message(group, user, content=None, reply_to=None):
        if not content:
            content = f'Message {TestDataFactory.random_string(8)}'
        return ChatMessage.objects.create(group=group, user=user.profile, content=content, reply_to=reply_to)

    @staticmethod
    def create_transaction(business, amount=None, type='income', category='Sales', date=None, description=None,
                           created_by=None):
        """Create a test ledger transaction"""
        return Transaction.objects.create(
            business=business,
            amount=amount if amount is not None else Decimal('100.00'),
            type=type,
            category=category,
            date=date or timezone.localdate(),
            description=description or f'Transaction {TestDataFactory.random_string(6)}',
            created_by=created_by.profile if created_by else None,
        )

    @staticmethod
    def create_contact(business, name=None, email=None, status='lead', value=None, company=''):
        """Create a test CRM contact"""
        if not name:
            name = f'Contact_{TestDataFactory.random_string(6)}'
        if not email:
            email = f'{name.lower()}@test.com'
        return Contact.objects.create(
            business=business,
            name=name,
            email=email,
            status=status,
            value=value if value is not None else Decimal('0.00'),
            company=company,
        )

    @staticmethod
    def create_document(business, title=None, content='', tags=None, created_by=None):
        if not title:
            title = f'Document_{TestDataFactory.random_string(6)}'
        return Document.objects.create(
            business=business,
            title=title,
            content=content,
            tags=tags or [],
            created_by=created_by.profile if created_by else None,
        )

    @staticmethod
    def create_website(business, name=None, template='business'):
        if not name:
            name = f'Website_{TestDataFactory.random_string(6)}'
        return Website.objects.create(business=business, name=name, template=template, title=name)


class AuthenticatedAPIClient(APIClient):
    """APIClient with authentication helper"""

    def authenticate_user(self, user):
        """Authenticate the client with a user"""
        refresh = RefreshToken.for_user(user)
        self.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
        return self

    def logout(self):
        """Remove authentication"""
        self.credentials()
