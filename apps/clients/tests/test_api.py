import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status
from apps.clients.models import Client
from apps.projects.models import Project


# =============================================================================
# Client List / Retrieve
# =============================================================================

@pytest.mark.django_db
class TestClientList:
    """Tests for GET /api/clients/"""

    def test_list_requires_authentication(self, api_client):
        response = api_client.get(reverse('clients:client-list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_list_clients(self, authenticated_client, client_acme, client_globex):
        response = authenticated_client.get(reverse('clients:client-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2
        names = [c['name'] for c in response.data['results']]
        assert names == ['Alice Moreau', 'Bruno Keller']

    def test_list_includes_project_totals(self, authenticated_client, client_acme, acme_project):
        response = authenticated_client.get(reverse('clients:client-list'))

        row = response.data['results'][0]
        assert row['project_count'] == 1
        assert row['total_amount'] == '5000.00'

    def test_search_matches_company_and_email(self, authenticated_client, client_acme, client_globex):
        url = reverse('clients:client-list')

        response = authenticated_client.get(url, {'search': 'globex'})
        assert [c['name'] for c in response.data['results']] == ['Bruno Keller']

        response = authenticated_client.get(url, {'search': 'alice@'})
        assert [c['name'] for c in response.data['results']] == ['Alice Moreau']

    def test_retrieve_client(self, authenticated_client, client_acme):
        url = reverse('clients:client-detail', kwargs={'pk': client_acme.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['company'] == 'Acme Weddings'
        assert response.data['project_count'] == 0

    def test_retrieve_missing_client(self, authenticated_client):
        url = reverse('clients:client-detail', kwargs={'pk': 9999})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Client Create / Update / Delete
# =============================================================================

@pytest.mark.django_db
class TestClientWrite:
    """Tests for client mutations."""

    def test_manager_creates_client(self, manager_client):
        response = manager_client.post(reverse('clients:client-list'), {
            'name': 'Chen Wei',
            'company': 'Lotus Studio',
            'number': '555-0101',
            'email': 'chen@lotus.example',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'Chen Wei'
        assert response.data['project_count'] == 0
        assert Client.objects.filter(email='chen@lotus.example').exists()

    def test_read_only_user_cannot_create(self, authenticated_client):
        response = authenticated_client.post(reverse('clients:client-list'), {
            'name': 'Chen Wei',
            'company': 'Lotus Studio',
            'number': '555-0101',
        }, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not Client.objects.exists()

    def test_create_requires_name(self, manager_client):
        response = manager_client.post(reverse('clients:client-list'), {
            'company': 'Lotus Studio',
            'number': '555-0101',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'name' in response.data

    def test_duplicate_email_conflicts(self, manager_client, client_acme):
        response = manager_client.post(reverse('clients:client-list'), {
            'name': 'Someone Else',
            'company': 'Other Co',
            'number': '555-0199',
            'email': 'ALICE@acme.example',
        }, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_partial_update(self, manager_client, client_acme):
        url = reverse('clients:client-detail', kwargs={'pk': client_acme.id})
        response = manager_client.patch(url, {'company': 'Acme Films'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['company'] == 'Acme Films'
        client_acme.refresh_from_db()
        assert client_acme.company == 'Acme Films'

    def test_update_keeps_own_email(self, manager_client, client_acme):
        url = reverse('clients:client-detail', kwargs={'pk': client_acme.id})
        response = manager_client.patch(url, {'email': client_acme.email, 'name': 'Alice M.'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == 'Alice M.'

    def test_delete_client_without_projects(self, manager_client, client_globex):
        url = reverse('clients:client-detail', kwargs={'pk': client_globex.id})
        response = manager_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Client.objects.filter(id=client_globex.id).exists()

    def test_delete_client_with_projects_conflicts(self, manager_client, client_acme, acme_project):
        url = reverse('clients:client-detail', kwargs={'pk': client_acme.id})
        response = manager_client.delete(url)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert Client.objects.filter(id=client_acme.id).exists()


# =============================================================================
# Custom actions
# =============================================================================

@pytest.mark.django_db
class TestClientActions:

    def test_stats(self, authenticated_client, client_acme, client_globex, acme_project):
        response = authenticated_client.get(reverse('clients:client-stats'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_clients'] == 2
        assert response.data['clients_with_projects'] == 1
        assert response.data['total_projects'] == 1
        assert response.data['total_revenue'] == '5000.00'
        assert response.data['average_projects_per_client'] == 0.5

    def test_stats_empty(self, authenticated_client):
        response = authenticated_client.get(reverse('clients:client-stats'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_clients'] == 0
        assert response.data['total_revenue'] == '0.00'
        assert response.data['average_projects_per_client'] == 0

    def test_dropdown(self, authenticated_client, client_acme, client_globex):
        response = authenticated_client.get(reverse('clients:client-dropdown'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == [
            {'id': client_acme.id, 'name': 'Alice Moreau', 'company': 'Acme Weddings'},
            {'id': client_globex.id, 'name': 'Bruno Keller', 'company': 'Globex Events'},
        ]

    def test_deleting_project_owner_keeps_project(self, client_acme, acme_project):
        """Projects survive their client being removed at the database level."""
        Client.objects.filter(id=client_acme.id).delete()

        acme_project.refresh_from_db()
        assert acme_project.client is None
        assert Project.objects.count() == 1
        assert acme_project.amount == Decimal('5000.00')
