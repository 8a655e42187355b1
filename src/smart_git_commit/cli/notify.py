"""User-facing notifications."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel
from rich.console import Console
from rich.panel import Panel

from smart_git_commit.log import get_logger

logger = get_logger("notify")


class NotificationType(str, Enum):
    """Severity of a notification."""

    INFORMATION = "information"
    WARNING = "warning"
    ERROR = "error"


STYLES = {
    NotificationType.INFORMATION: "green",
    NotificationType.WARNING: "yellow",
    NotificationType.ERROR: "red",
}


class Notification(BaseModel):
    title: str
    content: str
    type: NotificationType = NotificationType.INFORMATION


class Notifier:
    """Shows notifications on the console and remembers them."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self.history: List[Notification] = []

    def notify(
        self,
        title: str,
        content: str,
        type: NotificationType = NotificationType.INFORMATION,
    ) -> Notification:
        notification = Notification(title=title, content=content, type=type)
        self.history.append(notification)

        logger.info("Notification (%s) %s: %s", type.value, title, content)

        style = STYLES[type]
        self.console.print(
            Panel(content, title=f"[bold]{title}[/bold]", border_style=style, expand=False)
        )
        return notification

    @property
    def last(self) -> Optional[Notification]:
        return self.history[-1] if self.history else None
