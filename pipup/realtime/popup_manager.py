"""Owner of the single on-screen popup and its eviction timer."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from flask import current_app

from ..services.popup_schemas import PopupProps
from .display_surface import DisplaySurface, placement_for
from .scheduler import ScheduledTask, SerialScheduler

logger = logging.getLogger(__name__)

SurfaceFactory = Callable[[], DisplaySurface]


@dataclass
class CurrentPopup:
    surface: DisplaySurface
    props: PopupProps
    timer: Optional[ScheduledTask] = None


class PopupManager:
    """Shows at most one popup at a time; the newest request always wins.

    ``show`` and ``cancel`` only post work to the scheduler. The slot, the
    surface and the eviction timer are touched exclusively on the scheduler
    thread, so replace/cancel/expire never interleave.
    """

    def __init__(self, surface_factory: SurfaceFactory, scheduler: Optional[SerialScheduler] = None) -> None:
        self._surface_factory = surface_factory
        self._scheduler = scheduler or SerialScheduler()
        self._slot: Optional[CurrentPopup] = None

    def start(self) -> None:
        self._scheduler.start()

    def shutdown(self, timeout: float = 2.0) -> None:
        if self._scheduler.running:
            self._scheduler.call(self._remove_popup, timeout)
        self._scheduler.stop(timeout)

    def show(self, props: PopupProps, wait: bool = False, timeout: Optional[float] = None) -> Optional[bool]:
        """Replace whatever is shown with ``props``.

        Returns immediately unless ``wait`` is set, in which case it returns
        whether the popup made it onto the surface.
        """
        if wait:
            return self._scheduler.call(lambda: self._create_popup(props), timeout)
        self._scheduler.post(lambda: self._create_popup(props))
        return None

    def cancel(self) -> None:
        self._scheduler.post(self._remove_popup)

    def current(self, timeout: Optional[float] = None) -> Optional[PopupProps]:
        return self._scheduler.call(lambda: self._slot.props if self._slot else None, timeout)

    def flush(self, timeout: Optional[float] = None) -> None:
        """Block until everything posted so far has run."""
        self._scheduler.call(lambda: None, timeout)

    def _remove_popup(self) -> None:
        slot, self._slot = self._slot, None
        if slot is None:
            return
        if slot.timer is not None:
            slot.timer.cancel()
        self._destroy_surface(slot.surface)
        logger.debug("Removed popup: %s", slot.props)

    def _create_popup(self, props: PopupProps) -> bool:
        logger.debug("Create popup: %s", props)
        self._remove_popup()

        surface = None
        try:
            surface = self._surface_factory()
            surface.create()
            surface.render(props, placement_for(props.position))
        except Exception:
            logger.exception("Failed to show popup: %s", props)
            if surface is not None:
                self._destroy_surface(surface)
            return False

        slot = CurrentPopup(surface=surface, props=props)
        slot.timer = self._scheduler.post_delayed(lambda: self._expire(slot), props.duration)
        self._slot = slot
        return True

    def _expire(self, slot: CurrentPopup) -> None:
        # Stale timers belong to a popup that was already replaced or cancelled.
        if self._slot is slot:
            logger.debug("Popup expired after %ss", slot.props.duration)
            self._remove_popup()

    @staticmethod
    def _destroy_surface(surface: DisplaySurface) -> None:
        try:
            surface.destroy()
        except Exception:
            logger.exception("Failed to destroy display surface")


def current_popup_manager() -> PopupManager:
    return current_app.extensions["popup_manager"]


__all__ = ["CurrentPopup", "PopupManager", "SurfaceFactory", "current_popup_manager"]
