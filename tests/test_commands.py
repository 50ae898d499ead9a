"""
Tests for management commands and the nightly Celery task
"""
from io import StringIO

import pytest
from django.contrib.auth.models import User
from django.core.management import CommandError, call_command

from kanban.models import Project, Task, TodayEntry
from kanban.services import list_owners
from kanban.tasks import normalize_all_orders

from helpers import column_orders

pytestmark = pytest.mark.django_db


def run(name, *args, **options):
    out = StringIO()
    call_command(name, *args, stdout=out, **options)
    return out.getvalue()


class TestNormalizeOrders:
    def test_repairs_gaps(self, project, columns, make_tasks):
        a, b = make_tasks(columns[0], 'A', 'B')
        Task.objects.filter(pk=a.pk).update(order=4)
        Task.objects.filter(pk=b.pk).update(order=8)

        output = run('normalize_orders')

        assert 'tasks: 2 rows updated' in output
        assert column_orders(columns[0]) == [0, 1]

    def test_single_user(self, user, project):
        output = run('normalize_orders', user=user.username)
        assert user.username in output

    def test_includes_today_list_owners(self, user, other_user, columns, make_tasks):
        task, = make_tasks(columns[0], 'A')
        TodayEntry.objects.create(task=task, owner=other_user, order=0)

        output = run('normalize_orders')

        assert list(list_owners()) == [user, other_user]
        assert 'Processing user: luc' in output
        assert 'Processing user: sam' in output

    def test_unknown_user(self):
        with pytest.raises(CommandError):
            run('normalize_orders', user='nobody')


class TestNormalizeAllOrdersTask:
    def test_runs_for_every_owner(self, service, other_user, project, columns, make_tasks):
        a, b = make_tasks(columns[0], 'A', 'B')
        Task.objects.filter(pk=b.pk).update(order=5)
        Project.objects.create(author=other_user, name='Gapped', sidebar_order=3)

        result = normalize_all_orders.apply().get()

        assert result['status'] == 'completed'
        assert result['users_processed'] == 2
        assert result['rows_updated']['tasks'] == 1
        assert result['rows_updated']['projects'] == 1
        assert column_orders(columns[0]) == [0, 1]


class TestSetupAdmin:
    def test_creates_superuser(self, monkeypatch):
        monkeypatch.setenv('ADMIN_EMAIL', 'owner@example.com')
        monkeypatch.setenv('ADMIN_PASSWORD', 'a-strong-password')
        monkeypatch.setenv('ADMIN_NAME', 'Luc')

        output = run('setup_admin')

        admin = User.objects.get(email='owner@example.com')
        assert admin.is_superuser
        assert admin.first_name == 'Luc'
        assert admin.check_password('a-strong-password')
        assert 'created' in output

    def test_noop_when_present(self, monkeypatch):
        monkeypatch.setenv('ADMIN_EMAIL', 'owner@example.com')
        User.objects.create_user(username='owner', email='owner@example.com')

        output = run('setup_admin')

        assert 'already exists' in output
        assert User.objects.filter(email='owner@example.com').count() == 1


class TestUpdateAdmin:
    def test_changes_email_and_password(self):
        User.objects.create_user(username='admin@itmol.com', email='admin@itmol.com', password='old-pass')

        run('update_admin', old_email='admin@itmol.com', new_email='me@lucsam.com', new_password='new-pass')

        admin = User.objects.get(email='me@lucsam.com')
        assert admin.username == 'me@lucsam.com'
        assert admin.check_password('new-pass')

    def test_lists_users_when_missing(self, user):
        out = StringIO()
        with pytest.raises(CommandError):
            call_command('update_admin', old_email='ghost@example.com', new_password='x', stdout=out)

        assert user.email in out.getvalue()

    def test_nothing_to_update(self, monkeypatch):
        monkeypatch.delenv('NEW_EMAIL', raising=False)
        monkeypatch.delenv('NEW_PASSWORD', raising=False)
        with pytest.raises(CommandError):
            run('update_admin', old_email='admin@itmol.com', new_email=None, new_password=None)
