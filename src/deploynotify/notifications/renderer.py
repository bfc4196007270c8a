from typing import Optional

from deploynotify.config import ServerConfig
from deploynotify.dtos.deploy import Application, Deployment, User
from deploynotify.notifications.errors import RenderError

DEFAULT_TEMPLATE = """{github_repo} {status}:
{username} deployed {branch} on {target} :pizza:

> {comment}
<{github_url}|View latest commit on GitHub>
<{deployment_url}|Open deployment in Applikatoni>"""

SUCCESS_STATUS = "Successfully Deployed"
FAILURE_STATUS = "Deploy Failed"


class SummaryRenderer:
    """Builds the chat summary of a finished deployment."""

    def __init__(self, server: ServerConfig, template: Optional[str] = None):
        self.server = server
        self.template = template or DEFAULT_TEMPLATE

    def deployment_url(self, application: Application, deployment: Deployment) -> str:
        protocol = "https" if self.server.ssl_enabled else "http"
        return f"{protocol}://{self.server.host}/{application.github_repo}/deployments/{deployment.id}"

    @staticmethod
    def github_url(application: Application, deployment: Deployment) -> str:
        return (
            f"https://github.com/{application.github_owner}/{application.github_repo}"
            f"/commit/{deployment.commit_sha}"
        )

    def render(
        self, deployment: Deployment, application: Application, user: User, success: bool
    ) -> str:
        fields = {
            "github_repo": application.github_repo,
            "status": SUCCESS_STATUS if success else FAILURE_STATUS,
            "username": user.name,
            "branch": deployment.branch,
            "target": deployment.target_name,
            "comment": deployment.comment,
            "github_url": self.github_url(application, deployment),
            "deployment_url": self.deployment_url(application, deployment),
        }

        try:
            return self.template.format(**fields)
        except (KeyError, IndexError, ValueError, AttributeError) as e:
            raise RenderError(f"Invalid summary template: {e!r}") from e
