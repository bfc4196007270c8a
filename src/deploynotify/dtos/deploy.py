from dataclasses import dataclass, field
from typing import List, Optional

from deploynotify.core.enum import EntryType

# {
#     "deployment_id": 42,
#     "entry_type": "DEPLOYMENT_SUCCESS",
# }


@dataclass(frozen=True)
class LogEntry:
    deployment_id: int
    entry_type: EntryType = EntryType.OTHER


@dataclass
class Deployment:
    id: int
    application_name: str
    target_name: str
    user_id: int
    branch: str = ""
    commit_sha: str = ""
    comment: str = ""


@dataclass
class Target:
    name: str
    slack_url: str = ""


@dataclass
class Application:
    name: str
    github_owner: str = ""
    github_repo: str = ""
    targets: List[Target] = field(default_factory=list)

    def find_target(self, name: str) -> Optional[Target]:
        for target in self.targets:
            if target.name == name:
                return target
        return None


@dataclass
class User:
    id: int
    name: str


@dataclass
class ResolvedDeployment:
    deployment: Deployment
    application: Application
    target: Target
    user: Optional[User] = None


@dataclass(frozen=True)
class NotificationMessage:
    text: str
