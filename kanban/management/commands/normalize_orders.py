"""
Management command to repair contiguous ordering in every kanban list
"""
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from kanban.services import KanbanService, list_owners


class Command(BaseCommand):
    help = 'Re-stamp order values 0..n-1 for sidebars, columns, tasks and today lists'

    def add_arguments(self, parser):
        parser.add_argument(
            '--user',
            help='Only normalize lists owned by this username'
        )

    def handle(self, *args, **options):
        User = get_user_model()

        if options['user']:
            users = User.objects.filter(username=options['user'])
            if not users.exists():
                raise CommandError(f"User '{options['user']}' not found")
        else:
            users = list_owners()

        self.stdout.write('Normalizing kanban order values...')

        for user in users:
            self.stdout.write(f'\nProcessing user: {user.username}')
            try:
                counts = KanbanService(user).normalize()
            except Exception as e:
                self.stdout.write(self.style.ERROR(f'✗ Error processing {user.username}: {e}'))
                continue

            for name, count in counts.items():
                self.stdout.write(f'  {name}: {count} rows updated')
            self.stdout.write(self.style.SUCCESS(f'✓ {user.username} is contiguous'))

        self.stdout.write(self.style.SUCCESS('\n✓ All done!'))
