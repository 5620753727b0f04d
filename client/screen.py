"""
Screen Runner
Loading flag and user notifications around one screen's API calls
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional
from loguru import logger

from client.api_client import ApiError
from services.errors import ServiceError


@dataclass(frozen=True)
class Notification:
    level: str  # "success" or "error"
    message: str


class Screen:
    """
    Runs one action at a time for a screen

    No retries. After unmount() results and errors are dropped without
    touching screen state.
    """

    def __init__(self, name: str = "screen"):
        self.name = name
        self.loading = False
        self.mounted = True
        self.notifications: List[Notification] = []

    def notify(self, level: str, message: str) -> None:
        self.notifications.append(Notification(level, message))

    async def run(
        self,
        action: Callable[[], Awaitable[Any]],
        error_message: str,
        success_message: Optional[str] = None
    ) -> Optional[Any]:
        """
        Await an action with loading and notification handling

        Args:
            action: Zero-argument coroutine function
            error_message: Shown when the failure carries no message of its own
            success_message: Optional notification on success

        Returns:
            The action's result, or None on failure or after unmount
        """
        self.loading = True
        try:
            result = await action()
        except (ApiError, ServiceError) as e:
            if self.mounted:
                self.notify("error", e.message or error_message)
                logger.debug(f"{self.name}: {e.message or error_message}")
            return None
        finally:
            self.loading = False

        if not self.mounted:
            return None
        if success_message:
            self.notify("success", success_message)
        return result

    def unmount(self) -> None:
        self.mounted = False
