"""
Management command to change the admin account's email and password
"""
import os

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError


class Command(BaseCommand):
    help = 'Change email and/or password of an existing admin (OLD_EMAIL, NEW_EMAIL, NEW_PASSWORD)'

    def add_arguments(self, parser):
        parser.add_argument('--old-email', default=os.getenv('OLD_EMAIL', 'admin@itmol.com'))
        parser.add_argument('--new-email', default=os.getenv('NEW_EMAIL'))
        parser.add_argument('--new-password', default=os.getenv('NEW_PASSWORD'))

    def handle(self, *args, **options):
        User = get_user_model()

        old_email = options['old_email']
        new_email = options['new_email']
        new_password = options['new_password']

        if not new_email and not new_password:
            raise CommandError('Nothing to update: set NEW_EMAIL and/or NEW_PASSWORD')

        user = User.objects.filter(email__iexact=old_email).first()
        if user is None:
            self.stdout.write(self.style.ERROR(f'✗ No user with email {old_email}'))
            self.stdout.write('Existing users:')
            for existing in User.objects.order_by('pk'):
                self.stdout.write(f'  - {existing.email or "(no email)"} ({existing.username})')
            raise CommandError(f'User {old_email} not found')

        if new_email:
            if User.objects.filter(email__iexact=new_email).exclude(pk=user.pk).exists():
                raise CommandError(f'Email {new_email} is already taken')
            # Accounts created by setup_admin log in with their email
            if user.username == user.email:
                user.username = new_email
            user.email = new_email
        if new_password:
            user.set_password(new_password)
        user.save()

        self.stdout.write(self.style.SUCCESS('✓ Admin user updated successfully!'))
        self.stdout.write(f'  Email: {user.email}')
