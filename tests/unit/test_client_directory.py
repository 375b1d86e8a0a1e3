"""
Unit tests for ClientDirectory.
"""

import pytest

from application.exceptions import NotFoundError
from application.services import ClientDirectory, LinkedClient
from tests.fakes import FakeClientLinkRepository, create_client_link_repo


@pytest.mark.unit
class TestResolveClientUserId:
    def test_linked_client(self):
        directory = ClientDirectory(create_client_link_repo(user_id="u-42"))
        assert directory.resolve_client_user_id("trainer-1", "client-doc-1") == "u-42"

    def test_missing_client(self):
        directory = ClientDirectory(create_client_link_repo())
        with pytest.raises(NotFoundError, match="Client nope not found"):
            directory.resolve_client_user_id("trainer-1", "nope")

    def test_client_without_account(self):
        directory = ClientDirectory(create_client_link_repo(user_id=None))
        with pytest.raises(NotFoundError, match="does not have a linked user account"):
            directory.resolve_client_user_id("trainer-1", "client-doc-1")


@pytest.mark.unit
class TestListLinkedClients:
    def test_only_active_linked_clients(self):
        repo = FakeClientLinkRepository()
        repo.seed([
            {"id": "c1", "trainer_id": "t1", "user_id": "u1", "name": "Avery", "status": "Active"},
            {"id": "c2", "trainer_id": "t1", "user_id": None, "name": "Blake", "status": "active"},
            {"id": "c3", "trainer_id": "t1", "user_id": "u3", "name": "Casey", "status": "paused"},
            {"id": "c4", "trainer_id": "t2", "user_id": "u4", "name": "Drew", "status": "active"},
            {"id": "c5", "trainer_id": "t1", "user_id": "u5", "name": "", "status": "active"},
        ])

        clients = ClientDirectory(repo).list_linked_clients("t1")

        assert clients == [
            LinkedClient(id="c5", name="Unnamed Client", user_id="u5"),
            LinkedClient(id="c1", name="Avery", user_id="u1"),
        ]
