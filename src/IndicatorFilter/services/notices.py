"""Dismissible user notifications."""

from __future__ import annotations

from dataclasses import dataclass, field

from IndicatorFilter.utils.log import log


@dataclass(frozen=True, slots=True)
class Notice:
    """A non-blocking notification.

    Attributes:
        title: Short headline.
        description: Detail text.
        variant: "default" or "destructive".
    """

    title: str
    description: str = ""
    variant: str = "default"


@dataclass(slots=True)
class Notifier:
    """Collect notices and mirror them to the log."""

    notices: list[Notice] = field(default_factory=list)

    def notify(self, title: str, description: str = "", *, variant: str = "default") -> Notice:
        notice = Notice(title=title, description=description, variant=variant)
        self.notices.append(notice)
        if variant == "destructive":
            log.warning("%s: %s", title, description)
        else:
            log.info("%s: %s", title, description)
        return notice

    def dismiss(self, notice: Notice) -> None:
        if notice in self.notices:
            self.notices.remove(notice)

    def clear(self) -> None:
        self.notices.clear()

    @property
    def latest(self) -> Notice | None:
        return self.notices[-1] if self.notices else None
