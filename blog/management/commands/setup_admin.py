"""
Management command to create the site's admin account
"""
import os

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand


class Command(BaseCommand):
    help = 'Create the admin user from ADMIN_EMAIL / ADMIN_PASSWORD / ADMIN_NAME (no-op if it exists)'

    def handle(self, *args, **options):
        User = get_user_model()

        email = os.getenv('ADMIN_EMAIL', 'admin@itmol.com')
        password = os.getenv('ADMIN_PASSWORD', 'changeMe123!')
        name = os.getenv('ADMIN_NAME', 'Admin')

        if User.objects.filter(email__iexact=email).exists():
            self.stdout.write('Admin user already exists')
            return

        User.objects.create_superuser(
            username=email,
            email=email,
            password=password,
            first_name=name,
        )

        self.stdout.write(self.style.SUCCESS('✓ Admin user created successfully!'))
        self.stdout.write(f'  Email: {email}')
        if 'ADMIN_PASSWORD' not in os.environ:
            self.stdout.write(self.style.WARNING('  Default password in use, change it after first login!'))
