"""
Change notifications for the rendering layer.

The store, the pointer state machine and the form controller publish here;
the UI subscribes to re-render. Events emitted:

  tasks_changed    tasks=<list of Task>
  preview_changed  range=<(start, end) or None>
  form_opened      mode=<FormMode>, task_id=<int or None>, range=<(start, end) or None>
  form_closed      submitted=<bool>
"""
import logging
from typing import Dict, Callable, List

logger = logging.getLogger(__name__)

TASKS_CHANGED = "tasks_changed"
PREVIEW_CHANGED = "preview_changed"
FORM_OPENED = "form_opened"
FORM_CLOSED = "form_closed"


class EventHub:
    """Routes named events to registered callbacks."""

    def __init__(self):
        self.subscribers: Dict[str, List[Callable]] = {}  # event_type -> list of callbacks

    def subscribe(self, event_type: str, callback: Callable) -> None:
        """Register a callback for an event type."""
        if event_type not in self.subscribers:
            self.subscribers[event_type] = []
        self.subscribers[event_type].append(callback)

    def unsubscribe(self, event_type: str, callback: Callable) -> None:
        callbacks = self.subscribers.get(event_type, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event_type: str, **kwargs) -> None:
        """Emit an event to all subscribers. A failing callback never stops the rest."""
        for callback in list(self.subscribers.get(event_type, [])):
            try:
                callback(**kwargs)
            except Exception as e:
                logger.warning(f"Error in {event_type} callback: {e}")
