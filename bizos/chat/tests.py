"""
Comprehensive test suite for team chat
Tests: Groups, Members, Invitations, Messages, Typing indicators
"""
import uuid
from datetime import timedelta
from io import StringIO

from django.core.management import call_command
from django.test import TestCase, override_settings
from django.utils import timezone
from rest_framework import status
from bizos.chat.models import ChatGroup, GroupMember, GroupInvitation, ChatMessage, TypingIndicator
from bizos.chat.utils import generate_invitation_code, INVITATION_CODE_ALPHABET
from bizos.core.models import AuditLog
from bizos.core.test_utils import TestDataFactory, AuthenticatedAPIClient


class ChatTestCase(TestCase):
    """Owner with a business and one group; a member and an outsider"""

    def setUp(self):
        self.owner = TestDataFactory.create_user(full_name='Olivia Owner')
        self.member = TestDataFactory.create_user(full_name='Mark Member')
        self.outsider = TestDataFactory.create_user(full_name='Oscar Outsider')
        self.business = TestDataFactory.create_business(self.owner, name='Acme')
        self.group = TestDataFactory.create_group(self.business, self.owner, name='General')
        TestDataFactory.add_member(self.group, self.member)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.owner)


class ChatGroupTests(ChatTestCase):

    def test_list_groups_with_counts_and_admin_flag(self):
        TestDataFactory.create_group(self.business, self.member, name='Side project')
        response = self.client.get(f'/api/chat-groups/business/{self.business.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        by_name = {row['name']: row for row in response.data}
        self.assertEqual(by_name['General']['member_count'], 2)
        self.assertTrue(by_name['General']['is_admin'])
        self.assertEqual(by_name['Side project']['member_count'], 1)
        self.assertFalse(by_name['Side project']['is_admin'])

    def test_list_mine_only(self):
        TestDataFactory.create_group(self.business, self.member, name='Side project')
        response = self.client.get(f'/api/chat-groups/business/{self.business.id}/', {'mine': 'true'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row['name'] for row in response.data], ['General'])

    def test_outsider_cannot_list(self):
        self.client.authenticate_user(self.outsider)
        response = self.client.get(f'/api/chat-groups/business/{self.business.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_create_group_adds_creator_as_admin(self):
        response = self.client.post('/api/chat-groups/', {
            'name': 'Marketing',
            'description': 'Campaign planning',
            'business': str(self.business.id),
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['member_count'], 1)
        self.assertTrue(response.data['is_admin'])
        group = ChatGroup.objects.get(pk=response.data['id'])
        self.assertEqual(group.created_by, self.owner.profile)
        self.assertTrue(GroupMember.objects.filter(group=group, user=self.owner.profile, is_admin=True).exists())

    def test_create_group_validation(self):
        response = self.client.post('/api/chat-groups/', {'name': '', 'business': str(self.business.id)})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Invalid chat group data')

    def test_outsider_cannot_create_group(self):
        self.client.authenticate_user(self.outsider)
        response = self.client.post('/api/chat-groups/', {'name': 'Sneaky', 'business': str(self.business.id)})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(ChatGroup.objects.filter(name='Sneaky').exists())

    def test_non_admin_cannot_update_or_delete(self):
        self.client.authenticate_user(self.member)
        response = self.client.patch(f'/api/chat-groups/{self.group.id}/', {'name': 'Renamed'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        response = self.client.delete(f'/api/chat-groups/{self.group.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_updates_group(self):
        response = self.client.put(f'/api/chat-groups/{self.group.id}/', {'name': 'Announcements'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.group.refresh_from_db()
        self.assertEqual(self.group.name, 'Announcements')
        self.assertEqual(self.group.business_id, self.business.id)

    def test_delete_group_cascades(self):
        TestDataFactory.create_message(self.group, self.member)
        TestDataFactory.create_invitation(self.group, self.owner)
        response = self.client.delete(f'/api/chat-groups/{self.group.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(GroupMember.objects.filter(group_id=self.group.id).exists())
        self.assertFalse(ChatMessage.objects.filter(group_id=self.group.id).exists())
        self.assertFalse(GroupInvitation.objects.filter(group_id=self.group.id).exists())

    def test_get_missing_group(self):
        response = self.client.get(f'/api/chat-groups/{uuid.uuid4()}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class GroupMemberTests(ChatTestCase):

    def test_list_members_with_profiles(self):
        response = self.client.get(f'/api/group-members/{self.group.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 2)
        self.assertEqual(response.data[0]['profiles']['full_name'], 'Olivia Owner')
        self.assertTrue(response.data[0]['is_admin'])
        self.assertEqual(response.data[1]['profiles']['full_name'], 'Mark Member')

    def test_admin_adds_member(self):
        response = self.client.post('/api/group-members/', {
            'group': str(self.group.id),
            'user': str(self.outsider.pk),
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertFalse(response.data['is_admin'])
        self.assertTrue(self.group.is_member(self.outsider.profile))
        self.assertTrue(AuditLog.objects.filter(action='member_add').exists())

    def test_adding_existing_member_is_rejected(self):
        response = self.client.post('/api/group-members/', {
            'group': str(self.group.id),
            'user': str(self.member.pk),
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(GroupMember.objects.filter(group=self.group, user=self.member.profile).count(), 1)

    def test_non_admin_cannot_add_member(self):
        self.client.authenticate_user(self.member)
        response = self.client.post('/api/group-members/', {
            'group': str(self.group.id),
            'user': str(self.outsider.pk),
        })
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_promote_member(self):
        response = self.client.patch(f'/api/group-members/{self.group.id}/{self.member.pk}/', {'is_admin': True})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(self.group.is_admin(self.member.profile))

    def test_member_can_leave(self):
        self.client.authenticate_user(self.member)
        response = self.client.delete(f'/api/group-members/{self.group.id}/{self.member.pk}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(self.group.is_member(self.member.profile))
        self.assertTrue(self.group.is_member(self.owner.profile))

    def test_non_admin_cannot_remove_others(self):
        self.client.authenticate_user(self.member)
        response = self.client.delete(f'/api/group-members/{self.group.id}/{self.owner.pk}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(self.group.is_member(self.owner.profile))

    def test_remove_missing_membership(self):
        response = self.client.delete(f'/api/group-members/{self.group.id}/{self.outsider.pk}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_remove_deletes_only_that_row(self):
        other_group = TestDataFactory.create_group(self.business, self.owner)
        TestDataFactory.add_member(other_group, self.member)
        response = self.client.delete(f'/api/group-members/{self.group.id}/{self.member.pk}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertTrue(other_group.is_member(self.member.profile))


class InvitationCodeTests(TestCase):

    def test_code_is_url_safe_and_sized(self):
        code = generate_invitation_code()
        self.assertEqual(len(code), 16)
        self.assertTrue(all(ch in INVITATION_CODE_ALPHABET for ch in code))

    def test_codes_differ(self):
        self.assertNotEqual(generate_invitation_code(), generate_invitation_code())

    def test_invalid_reason(self):
        owner = TestDataFactory.create_user()
        group = TestDataFactory.create_group(TestDataFactory.create_business(owner), owner)
        invitation = TestDataFactory.create_invitation(group, owner)
        self.assertIsNone(invitation.invalid_reason())

        invitation.expires_at = timezone.now() - timedelta(minutes=1)
        self.assertEqual(invitation.invalid_reason(), 'This invitation link has expired')

        invitation.expires_at = None
        invitation.max_uses = 2
        invitation.current_uses = 2
        self.assertEqual(invitation.invalid_reason(), 'This invitation link has reached its usage limit')

        invitation.is_active = False
        self.assertEqual(invitation.invalid_reason(), 'This invitation link has been deactivated')


class GroupInvitationTests(ChatTestCase):

    def test_create_invitation(self):
        response = self.client.post('/api/group-invitations/', {
            'group': str(self.group.id),
            'max_uses': 5,
            'expires_in_days': 7,
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(len(response.data['invitation_code']), 16)
        self.assertEqual(response.data['max_uses'], 5)
        self.assertEqual(response.data['current_uses'], 0)
        self.assertTrue(response.data['is_active'])
        self.assertTrue(response.data['is_valid'])
        invitation = GroupInvitation.objects.get(pk=response.data['id'])
        self.assertGreater(invitation.expires_at, timezone.now() + timedelta(days=6))
        self.assertEqual(invitation.created_by, self.owner.profile)

    def test_non_admin_cannot_create_invitation(self):
        self.client.authenticate_user(self.member)
        response = self.client.post('/api/group-invitations/', {'group': str(self.group.id)})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_preview_by_code_is_public(self):
        invitation = TestDataFactory.create_invitation(self.group, self.owner)
        self.client.logout()
        response = self.client.get(f'/api/group-invitations/code/{invitation.invitation_code}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['group_name'], 'General')
        self.assertEqual(response.data['business_name'], 'Acme')
        self.assertTrue(response.data['is_valid'])
        self.assertIsNone(response.data['reason'])

    def test_preview_unknown_code(self):
        response = self.client.get('/api/group-invitations/code/doesnotexist/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_list_group_invitations(self):
        TestDataFactory.create_invitation(self.group, self.owner)
        TestDataFactory.create_invitation(self.group, self.owner, is_active=False)
        response = self.client.get(f'/api/group-invitations/group/{self.group.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 2)

    def test_deactivate(self):
        invitation = TestDataFactory.create_invitation(self.group, self.owner)
        response = self.client.post(f'/api/group-invitations/{invitation.id}/deactivate/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['is_active'])
        self.assertEqual(response.data['reason'], 'This invitation link has been deactivated')

    def test_accept_joins_group_and_counts_use(self):
        invitation = TestDataFactory.create_invitation(self.group, self.owner, max_uses=2)
        self.client.authenticate_user(self.outsider)
        response = self.client.post(f'/api/group-invitations/code/{invitation.invitation_code}/accept/')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertFalse(response.data['already_member'])
        self.assertFalse(response.data['member']['is_admin'])
        invitation.refresh_from_db()
        self.assertEqual(invitation.current_uses, 1)
        self.assertTrue(self.group.is_member(self.outsider.profile))
        self.assertTrue(AuditLog.objects.filter(action='invitation_accept').exists())

    def test_accept_as_existing_member(self):
        invitation = TestDataFactory.create_invitation(self.group, self.owner)
        self.client.authenticate_user(self.member)
        response = self.client.post(f'/api/group-invitations/code/{invitation.invitation_code}/accept/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['already_member'])
        invitation.refresh_from_db()
        self.assertEqual(invitation.current_uses, 0)

    def test_accept_deactivated(self):
        invitation = TestDataFactory.create_invitation(self.group, self.owner, is_active=False)
        self.client.authenticate_user(self.outsider)
        response = self.client.post(f'/api/group-invitations/code/{invitation.invitation_code}/accept/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'This invitation link has been deactivated')
        self.assertFalse(self.group.is_member(self.outsider.profile))

    def test_accept_expired(self):
        invitation = TestDataFactory.create_invitation(
            self.group, self.owner, expires_at=timezone.now() - timedelta(days=1)
        )
        self.client.authenticate_user(self.outsider)
        response = self.client.post(f'/api/group-invitations/code/{invitation.invitation_code}/accept/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'This invitation link has expired')

    def test_accept_usage_limit_reached(self):
        invitation = TestDataFactory.create_invitation(self.group, self.owner, max_uses=1)
        self.client.authenticate_user(self.outsider)
        response = self.client.post(f'/api/group-invitations/code/{invitation.invitation_code}/accept/')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        latecomer = TestDataFactory.create_user()
        self.client.authenticate_user(latecomer)
        response = self.client.post(f'/api/group-invitations/code/{invitation.invitation_code}/accept/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'This invitation link has reached its usage limit')
        invitation.refresh_from_db()
        self.assertEqual(invitation.current_uses, 1)

    def test_accepting_grants_business_access(self):
        invitation = TestDataFactory.create_invitation(self.group, self.owner)
        self.client.authenticate_user(self.outsider)
        self.client.post(f'/api/group-invitations/code/{invitation.invitation_code}/accept/')
        response = self.client.get(f'/api/business-accounts/{self.business.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)


class ChatMessageTests(ChatTestCase):

    def test_send_message_as_requester(self):
        self.client.authenticate_user(self.member)
        response = self.client.post('/api/chat-messages/', {
            'group': str(self.group.id),
            'content': '  Hello team  ',
            'user': str(self.owner.pk),
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['content'], 'Hello team')
        self.assertEqual(response.data['user'], self.member.pk)
        self.assertEqual(response.data['profiles']['full_name'], 'Mark Member')
        self.assertEqual(response.data['message_type'], 'text')

    def test_empty_message_rejected(self):
        response = self.client.post('/api/chat-messages/', {'group': str(self.group.id), 'content': '   '})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('content', response.data['details'])

    def test_non_member_cannot_post(self):
        self.client.authenticate_user(self.outsider)
        response = self.client.post('/api/chat-messages/', {'group': str(self.group.id), 'content': 'Hi'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(ChatMessage.objects.exists())

    def test_reply_must_be_in_same_group(self):
        other_group = TestDataFactory.create_group(self.business, self.owner)
        foreign = TestDataFactory.create_message(other_group, self.owner)
        response = self.client.post('/api/chat-messages/', {
            'group': str(self.group.id),
            'content': 'Replying',
            'reply_to': str(foreign.id),
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('reply_to', response.data['details'])

    def test_reply_in_same_group(self):
        original = TestDataFactory.create_message(self.group, self.member)
        response = self.client.post('/api/chat-messages/', {
            'group': str(self.group.id),
            'content': 'Agreed',
            'reply_to': str(original.id),
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['reply_to'], original.id)

    def test_file_message_requires_url(self):
        response = self.client.post('/api/chat-messages/', {
            'group': str(self.group.id),
            'content': 'See attached',
            'message_type': 'file',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('file_url', response.data['details'])

    def test_list_returns_newest_in_chronological_order(self):
        messages = [TestDataFactory.create_message(self.group, self.owner, content=f'm{i}') for i in range(5)]
        response = self.client.get(f'/api/chat-messages/{self.group.id}/', {'limit': 3})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row['content'] for row in response.data], ['m2', 'm3', 'm4'])
        self.assertEqual(response.data[-1]['id'], str(messages[-1].id))
        self.assertEqual(response.data[0]['profiles']['full_name'], 'Olivia Owner')

    def test_list_limit_is_capped(self):
        for i in range(3):
            TestDataFactory.create_message(self.group, self.owner)
        with override_settings(CHAT_MESSAGES_MAX_LIMIT=2):
            response = self.client.get(f'/api/chat-messages/{self.group.id}/', {'limit': 500})
        self.assertEqual(len(response.data), 2)

    def test_list_after_timestamp(self):
        old = TestDataFactory.create_message(self.group, self.owner, content='old')
        ChatMessage.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(minutes=10))
        TestDataFactory.create_message(self.group, self.owner, content='new')
        after = (timezone.now() - timedelta(minutes=5)).isoformat()
        response = self.client.get(f'/api/chat-messages/{self.group.id}/', {'after': after})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row['content'] for row in response.data], ['new'])

    def test_polling_after_cursor_delivers_every_message(self):
        start = timezone.now() - timedelta(minutes=10)
        cursor = TestDataFactory.create_message(self.group, self.owner, content='seen')
        ChatMessage.objects.filter(pk=cursor.pk).update(created_at=start)
        for i in range(5):
            message = TestDataFactory.create_message(self.group, self.owner, content=f'm{i}')
            ChatMessage.objects.filter(pk=message.pk).update(created_at=start + timedelta(seconds=i + 1))

        received = []
        after = start.isoformat()
        for _ in range(10):
            response = self.client.get(f'/api/chat-messages/{self.group.id}/', {'after': after, 'limit': 2})
            self.assertEqual(response.status_code, status.HTTP_200_OK)
            if not response.data:
                break
            self.assertLessEqual(len(response.data), 2)
            received.extend(row['content'] for row in response.data)
            after = response.data[-1]['created_at']
        self.assertEqual(received, ['m0', 'm1', 'm2', 'm3', 'm4'])

    def test_list_invalid_params(self):
        response = self.client.get(f'/api/chat-messages/{self.group.id}/', {'after': 'yesterday'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = self.client.get(f'/api/chat-messages/{self.group.id}/', {'limit': 'ten'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_outsider_cannot_read(self):
        self.client.authenticate_user(self.outsider)
        response = self.client.get(f'/api/chat-messages/{self.group.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_edit_own_message(self):
        message = TestDataFactory.create_message(self.group, self.member, content='typo')
        self.client.authenticate_user(self.member)
        response = self.client.patch(f'/api/chat-messages/message/{message.id}/', {'content': 'fixed'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['content'], 'fixed')

    def test_removed_member_cannot_edit(self):
        message = TestDataFactory.create_message(self.group, self.member, content='before leaving')
        GroupMember.objects.filter(group=self.group, user=self.member.profile).delete()
        self.client.authenticate_user(self.member)
        response = self.client.patch(f'/api/chat-messages/message/{message.id}/', {'content': 'after leaving'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        message.refresh_from_db()
        self.assertEqual(message.content, 'before leaving')

    def test_cannot_edit_others_message(self):
        message = TestDataFactory.create_message(self.group, self.member, content='mine')
        response = self.client.patch(f'/api/chat-messages/message/{message.id}/', {'content': 'yours'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        message.refresh_from_db()
        self.assertEqual(message.content, 'mine')


class TypingIndicatorTests(ChatTestCase):

    def test_upsert_inserts_then_bumps(self):
        response = self.client.post('/api/typing-indicators/', {'group': str(self.group.id)})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        indicator = TypingIndicator.objects.get(group=self.group, user=self.owner.profile)
        stale_time = timezone.now() - timedelta(seconds=30)
        TypingIndicator.objects.filter(pk=indicator.pk).update(last_typing=stale_time)

        response = self.client.post('/api/typing-indicators/', {'group': str(self.group.id)})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(TypingIndicator.objects.filter(group=self.group).count(), 1)
        indicator.refresh_from_db()
        self.assertGreater(indicator.last_typing, stale_time)

    def test_upsert_requires_group(self):
        response = self.client.post('/api/typing-indicators/', {})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_upsert_rejects_non_object_body(self):
        response = self.client.post('/api/typing-indicators/', [str(self.group.id)], format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(TypingIndicator.objects.exists())

    def test_non_member_cannot_type(self):
        self.client.authenticate_user(self.outsider)
        response = self.client.post('/api/typing-indicators/', {'group': str(self.group.id)})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_excludes_requester_and_stale_rows(self):
        TypingIndicator.objects.create(group=self.group, user=self.owner.profile)
        TypingIndicator.objects.create(group=self.group, user=self.member.profile)
        third = TestDataFactory.create_user()
        TestDataFactory.add_member(self.group, third)
        TypingIndicator.objects.create(
            group=self.group, user=third.profile, last_typing=timezone.now() - timedelta(seconds=60)
        )
        response = self.client.get(f'/api/typing-indicators/{self.group.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['user'], self.member.pk)
        self.assertEqual(response.data[0]['profiles']['full_name'], 'Mark Member')

    def test_clear_own_indicator(self):
        TypingIndicator.objects.create(group=self.group, user=self.owner.profile)
        response = self.client.delete(f'/api/typing-indicators/{self.group.id}/{self.owner.pk}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(TypingIndicator.objects.exists())

    def test_cannot_clear_someone_else(self):
        TypingIndicator.objects.create(group=self.group, user=self.member.profile)
        response = self.client.delete(f'/api/typing-indicators/{self.group.id}/{self.member.pk}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(TypingIndicator.objects.exists())

    def test_purge_command_removes_stale_rows(self):
        TypingIndicator.objects.create(group=self.group, user=self.owner.profile)
        TypingIndicator.objects.create(
            group=self.group, user=self.member.profile, last_typing=timezone.now() - timedelta(minutes=5)
        )
        out = StringIO()
        call_command('purge_typing_indicators', '--dry-run', stdout=out)
        self.assertEqual(TypingIndicator.objects.count(), 2)

        call_command('purge_typing_indicators', stdout=out)
        self.assertEqual(TypingIndicator.objects.count(), 1)
        self.assertIn('Deleted 1 stale typing indicators', out.getvalue())
