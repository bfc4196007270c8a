from typing import Dict, Optional

import pytest
from sqlalchemy import create_engine, insert

from deploynotify.config import Config, ServerConfig
from deploynotify.core.storage import deployments, metadata, users
from deploynotify.dtos.deploy import Application, Deployment, Target, User


class FakeStorage:
    """In-memory storage keyed by id."""

    def __init__(self, deployments=(), users=()):
        self.deployments: Dict[int, Deployment] = {d.id: d for d in deployments}
        self.users: Dict[int, User] = {u.id: u for u in users}

    def get_deployment(self, deployment_id: int) -> Optional[Deployment]:
        return self.deployments.get(deployment_id)

    def get_user(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)


@pytest.fixture
def application() -> Application:
    return Application(
        name="app",
        github_owner="acme",
        github_repo="app",
        targets=[
            Target(name="production", slack_url="https://hooks.slack.com/services/T0/B0/XXX"),
            Target(name="staging", slack_url=""),
        ],
    )


@pytest.fixture
def config(application: Application) -> Config:
    """Create test configuration."""
    return Config(
        server=ServerConfig(host="ci.acme.com", ssl_enabled=True),
        applications=[application],
    )


@pytest.fixture
def deployment() -> Deployment:
    return Deployment(
        id=7,
        application_name="app",
        target_name="production",
        user_id=1,
        branch="main",
        commit_sha="abc123",
        comment="fix bug",
    )


@pytest.fixture
def user() -> User:
    return User(id=1, name="alice")


@pytest.fixture
def storage(deployment: Deployment, user: User) -> FakeStorage:
    staging = Deployment(
        id=8,
        application_name="app",
        target_name="staging",
        user_id=1,
        branch="develop",
        commit_sha="def456",
        comment="try it out",
    )
    return FakeStorage(deployments=[deployment, staging], users=[user])


@pytest.fixture
def sqlite_url(tmp_path) -> str:
    """Create a sqlite database holding the test deployments."""
    url = f"sqlite:///{tmp_path / 'deploynotify.db'}"
    engine = create_engine(url)
    metadata.create_all(engine)

    with engine.begin() as conn:
        conn.execute(insert(users), [{"id": 1, "name": "alice"}, {"id": 2, "name": "bob"}])
        conn.execute(
            insert(deployments),
            [
                {
                    "id": 7,
                    "application_name": "app",
                    "target_name": "production",
                    "user_id": 1,
                    "branch": "main",
                    "commit_sha": "abc123",
                    "comment": "fix bug",
                },
                {
                    "id": 8,
                    "application_name": "app",
                    "target_name": "staging",
                    "user_id": 2,
                    "branch": "develop",
                    "commit_sha": "def456",
                    "comment": "",
                },
            ],
        )

    engine.dispose()
    return url
