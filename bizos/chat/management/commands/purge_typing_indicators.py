from django.core.management.base import BaseCommand
from bizos.chat.models import TypingIndicator


class Command(BaseCommand):
    help = 'Deletes typing indicators older than TYPING_INDICATOR_TTL_SECONDS'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Count stale indicators without deleting them',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        stale = TypingIndicator.objects.stale()
        count = stale.count()

        if dry_run:
            self.stdout.write(self.style.WARNING(f"DRY RUN MODE: {count} stale typing indicators would be deleted."))
            return

        stale.delete()
        self.stdout.write(self.style.SUCCESS(f"Deleted {count} stale typing indicators."))
