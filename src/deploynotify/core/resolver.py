"""Resolve the entities that describe a deployment."""

from deploynotify.config import Config
from deploynotify.core.storage import Storage
from deploynotify.dtos.deploy import ResolvedDeployment
from deploynotify.notifications.errors import NotFoundError


class EntityResolver:
    def __init__(self, storage: Storage, config: Config):
        self.storage = storage
        self.config = config

    def resolve(self, deployment_id: int, skip_disabled: bool = True) -> ResolvedDeployment:
        """Look up deployment, application, target and user for a deployment.

        Args:
            deployment_id: Id carried by the log entry
            skip_disabled: Stop before the user lookup when the target has no
                webhook; the returned record then has no user

        Returns:
            The resolved entities

        Raises:
            NotFoundError: on the first entity that does not exist
        """
        deployment = self.storage.get_deployment(deployment_id)
        if deployment is None:
            raise NotFoundError("Deployment", deployment_id)

        application = self.config.find_application(deployment.application_name)
        if application is None:
            raise NotFoundError("Application", deployment.application_name)

        target = application.find_target(deployment.target_name)
        if target is None:
            raise NotFoundError("Target", deployment.target_name)

        if skip_disabled and not target.slack_url:
            return ResolvedDeployment(deployment=deployment, application=application, target=target)

        user = self.storage.get_user(deployment.user_id)
        if user is None:
            raise NotFoundError("User", deployment.user_id)

        return ResolvedDeployment(
            deployment=deployment,
            application=application,
            target=target,
            user=user,
        )
