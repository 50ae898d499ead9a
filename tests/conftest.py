import pytest
from django.contrib.auth.models import User
from rest_framework.test import APIClient

from kanban.models import Column
from kanban.services import KanbanService


@pytest.fixture(autouse=True)
def default_columns(settings):
    settings.KANBAN_DEFAULT_COLUMNS = ['To Do', 'In Progress', 'Done']


@pytest.fixture
def user(db):
    return User.objects.create_user(username='luc', email='luc@example.com', password='secret-pass')


@pytest.fixture
def other_user(db):
    return User.objects.create_user(username='sam', email='sam@example.com', password='secret-pass')


@pytest.fixture
def api_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def anon_client():
    return APIClient()


@pytest.fixture
def service(user):
    return KanbanService(user)


@pytest.fixture
def project(service):
    """Project with To Do / In Progress / Done columns"""
    return service.create_project('Website')


@pytest.fixture
def columns(project):
    return list(Column.objects.filter(project=project).order_by('order'))


@pytest.fixture
def make_tasks(service, project):
    """make_tasks(column, 'A', 'B') -> tasks appended to ``column`` in that order"""
    def _make(column, *titles):
        return [service.create_task(project.pk, column.pk, title) for title in titles]
    return _make
