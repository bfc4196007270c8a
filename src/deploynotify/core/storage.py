"""Read-only access to deployments and users.

The tables are owned by the deployment server; this module only reads them.
"""

from typing import Optional, Protocol

from sqlalchemy import Column, Integer, MetaData, String, Table, Text, create_engine, select
from sqlalchemy.engine import Engine

from deploynotify.dtos.deploy import Deployment, User

metadata = MetaData()

deployments = Table(
    "deployments",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("application_name", String(255), nullable=False),
    Column("target_name", String(255), nullable=False),
    Column("user_id", Integer, nullable=False),
    Column("branch", String(255), nullable=False, default=""),
    Column("commit_sha", String(64), nullable=False, default=""),
    Column("comment", Text, nullable=False, default=""),
)

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String(255), nullable=False),
)


class Storage(Protocol):
    def get_deployment(self, deployment_id: int) -> Optional[Deployment]: ...

    def get_user(self, user_id: int) -> Optional[User]: ...


class SqlStorage:
    """Storage backed by a SQLAlchemy engine.

    Every query checks out its own connection, so one instance can be shared
    by all notification threads.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def from_url(cls, url: str) -> "SqlStorage":
        return cls(create_engine(url))

    def get_deployment(self, deployment_id: int) -> Optional[Deployment]:
        stmt = select(deployments).where(deployments.c.id == deployment_id)
        with self.engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()

        if row is None:
            return None

        return Deployment(
            id=row["id"],
            application_name=row["application_name"],
            target_name=row["target_name"],
            user_id=row["user_id"],
            branch=row["branch"] or "",
            commit_sha=row["commit_sha"] or "",
            comment=row["comment"] or "",
        )

    def get_user(self, user_id: int) -> Optional[User]:
        stmt = select(users).where(users.c.id == user_id)
        with self.engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()

        if row is None:
            return None
        return User(id=row["id"], name=row["name"])
