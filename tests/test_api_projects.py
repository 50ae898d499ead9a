"""
API tests for projects and columns
"""
import pytest

from kanban.models import Column, Project

pytestmark = pytest.mark.django_db


def create_project(client, name, **extra):
    response = client.post('/api/projects/', {'name': name, **extra}, format='json')
    assert response.status_code == 201, response.data
    return response.data


class TestProjectsAPI:
    def test_requires_authentication(self, anon_client):
        response = anon_client.get('/api/projects/')
        assert response.status_code in (401, 403)

    def test_create_returns_columns(self, api_client):
        data = create_project(api_client, 'Website')

        assert data['color'] == '#3b82f6'
        assert data['sidebar_order'] == 0
        assert [column['name'] for column in data['columns']] == ['To Do', 'In Progress', 'Done']

    def test_create_without_name(self, api_client):
        response = api_client.post('/api/projects/', {'name': '  '}, format='json')

        assert response.status_code == 400
        assert 'Project name is required' in str(response.data['name'])

    def test_create_with_bad_color(self, api_client):
        response = api_client.post('/api/projects/', {'name': 'A', 'color': 'blue'}, format='json')
        assert response.status_code == 400

    def test_list_sidebar_with_counts(self, api_client):
        project = create_project(api_client, 'Website')
        create_project(api_client, 'Garden')
        todo, _, done = project['columns']
        for title, column in (('A', todo), ('B', done), ('C', done)):
            api_client.post('/api/tasks/', {
                'title': title, 'project': project['id'], 'column': column['id'],
            }, format='json')

        response = api_client.get('/api/projects/')

        assert response.status_code == 200
        assert [entry['name'] for entry in response.data] == ['Website', 'Garden']
        assert response.data[0]['task_count'] == 3
        assert response.data[0]['completed_count'] == 2
        assert response.data[1]['task_count'] == 0

    def test_list_is_owner_scoped(self, api_client, other_user):
        Project.objects.create(author=other_user, name='Not mine')
        create_project(api_client, 'Mine')

        response = api_client.get('/api/projects/')

        assert [entry['name'] for entry in response.data] == ['Mine']

    def test_retrieve_foreign_project(self, api_client, other_user):
        foreign = Project.objects.create(author=other_user, name='Not mine')
        assert api_client.get(f'/api/projects/{foreign.pk}/').status_code == 404

    def test_patch_name_keeps_color(self, api_client):
        project = create_project(api_client, 'Website', color='#22c55e')

        response = api_client.patch(f"/api/projects/{project['id']}/", {'name': 'Blog'}, format='json')

        assert response.status_code == 200
        assert response.data['name'] == 'Blog'
        assert response.data['color'] == '#22c55e'

    def test_delete_compacts_sidebar(self, api_client, user):
        a = create_project(api_client, 'A')
        create_project(api_client, 'B')
        create_project(api_client, 'C')

        response = api_client.delete(f"/api/projects/{a['id']}/")

        assert response.status_code == 204
        assert list(Project.objects.filter(author=user).order_by('sidebar_order')
                    .values_list('name', 'sidebar_order')) == [('B', 0), ('C', 1)]

    def test_reorder(self, api_client):
        a = create_project(api_client, 'A')
        b = create_project(api_client, 'B')

        response = api_client.put('/api/projects/reorder/', {'project_orders': [
            {'id': a['id'], 'sidebar_order': 1},
            {'id': b['id'], 'sidebar_order': 0},
        ]}, format='json')

        assert response.status_code == 200
        assert [entry['name'] for entry in api_client.get('/api/projects/').data] == ['B', 'A']

    def test_reorder_subset_is_rejected(self, api_client):
        a = create_project(api_client, 'A')
        create_project(api_client, 'B')

        response = api_client.put('/api/projects/reorder/', {'project_orders': [
            {'id': a['id'], 'sidebar_order': 0},
        ]}, format='json')

        assert response.status_code == 400
        assert response.data['error'] is True

    def test_reorder_foreign_id_is_not_found(self, api_client, other_user):
        a = create_project(api_client, 'A')
        foreign = Project.objects.create(author=other_user, name='Not mine')

        response = api_client.put('/api/projects/reorder/', {'project_orders': [
            {'id': a['id'], 'sidebar_order': 0},
            {'id': foreign.pk, 'sidebar_order': 1},
        ]}, format='json')

        assert response.status_code == 404


class TestColumnsAPI:
    def test_list_project_columns(self, api_client):
        project = create_project(api_client, 'Website')

        response = api_client.get(f"/api/projects/{project['id']}/columns/")

        assert response.status_code == 200
        assert [(column['name'], column['order']) for column in response.data] == [
            ('To Do', 0), ('In Progress', 1), ('Done', 2),
        ]
        assert response.data[2]['is_done'] is True

    def test_create_appends(self, api_client):
        project = create_project(api_client, 'Website')

        response = api_client.post('/api/columns/', {'name': 'Review', 'project': project['id']}, format='json')

        assert response.status_code == 201
        assert response.data['order'] == 3

    def test_create_without_name(self, api_client):
        project = create_project(api_client, 'Website')

        response = api_client.post('/api/columns/', {'name': '', 'project': project['id']}, format='json')

        assert response.status_code == 400
        assert 'Column name is required' in str(response.data['name'])

    def test_create_in_foreign_project(self, api_client, other_user):
        foreign = Project.objects.create(author=other_user, name='Not mine')

        response = api_client.post('/api/columns/', {'name': 'X', 'project': foreign.pk}, format='json')

        assert response.status_code == 404

    def test_rename_and_move(self, api_client):
        project = create_project(api_client, 'Website')
        done = project['columns'][2]

        response = api_client.patch(f"/api/columns/{done['id']}/", {'name': 'Finished', 'order': 0}, format='json')

        assert response.status_code == 200
        assert response.data['name'] == 'Finished'
        names = Column.objects.filter(project_id=project['id']).order_by('order').values_list('name', flat=True)
        assert list(names) == ['Finished', 'To Do', 'In Progress']

    def test_delete_non_empty_column(self, api_client):
        project = create_project(api_client, 'Website')
        todo = project['columns'][0]
        api_client.post('/api/tasks/', {'title': 'A', 'project': project['id'], 'column': todo['id']}, format='json')

        response = api_client.delete(f"/api/columns/{todo['id']}/")

        assert response.status_code == 400
        assert response.data['details']['rule'] == 'column_not_empty'

    def test_delete_last_column(self, api_client, settings):
        settings.KANBAN_DEFAULT_COLUMNS = ['Only']
        project = create_project(api_client, 'Tiny')

        response = api_client.delete(f"/api/columns/{project['columns'][0]['id']}/")

        assert response.status_code == 400
        assert response.data['details']['rule'] == 'last_column'

    def test_delete_empty_column(self, api_client):
        project = create_project(api_client, 'Website')

        response = api_client.delete(f"/api/columns/{project['columns'][1]['id']}/")

        assert response.status_code == 204
        orders = Column.objects.filter(project_id=project['id']).order_by('order').values_list('order', flat=True)
        assert list(orders) == [0, 1]

    def test_bulk_reorder(self, api_client):
        project = create_project(api_client, 'Website')
        todo, doing, done = project['columns']

        response = api_client.put(f"/api/projects/{project['id']}/columns/reorder/", {'column_orders': [
            {'id': done['id'], 'order': 0},
            {'id': todo['id'], 'order': 1},
            {'id': doing['id'], 'order': 2},
        ]}, format='json')

        assert response.status_code == 200
        assert [entry['id'] for entry in response.data['column_orders']] == [done['id'], todo['id'], doing['id']]
