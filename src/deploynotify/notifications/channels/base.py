from abc import ABC, abstractmethod

from deploynotify.dtos.deploy import ResolvedDeployment


class NotificationChannel(ABC):
    @abstractmethod
    def send(self, resolved: ResolvedDeployment, text: str) -> bool:
        """Deliver ``text`` for ``resolved`` and report whether it got through."""
        raise NotImplementedError
