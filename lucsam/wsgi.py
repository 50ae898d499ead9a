"""
WSGI config for lucsam project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'lucsam.settings')

application = get_wsgi_application()
