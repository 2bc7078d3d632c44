from __future__ import annotations

import dataclasses
import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from gemini_service import generate_image, get_morning_essence
from models import INITIAL_MOOD, MoodData, MorningEssence, Task
from prompts import DEFAULT_IMAGE_PROMPT

logger = logging.getLogger(__name__)

EssenceFn = Callable[[Optional[str]], MorningEssence]
ImageFn = Callable[[str], Optional[str]]


@dataclass
class DashboardState:
    essence_loading: bool = True
    essence: Optional[MorningEssence] = None
    location: str = ""
    location_attempted: bool = False
    tasks: list[Task] = field(default_factory=list)
    mood: tuple[MoodData, ...] = INITIAL_MOOD
    image_prompt: str = DEFAULT_IMAGE_PROMPT
    image_loading: bool = False
    generated_image: Optional[str] = None

    def snapshot(self) -> dict[str, Any]:
        return {
            "essence_loading": self.essence_loading,
            "essence": self.essence.to_dict() if self.essence else None,
            "location": self.location,
            "location_attempted": self.location_attempted,
            "tasks": [task.to_dict() for task in self.tasks],
            "mood": [{"day": m.day, "level": m.level} for m in self.mood],
            "image_prompt": self.image_prompt,
            "image_loading": self.image_loading,
            "generated_image": self.generated_image,
        }


class Dashboard:
    """Owns the dashboard state and applies one transition per event.

    Remote calls run outside the lock so task edits are not blocked by an
    outstanding request. Each remote call takes a ticket; a response is only
    applied if its ticket is still the newest one for that concern, so a slow
    reply can never overwrite a newer one.
    """

    def __init__(
        self,
        essence_fn: EssenceFn | None = None,
        image_fn: ImageFn | None = None,
    ) -> None:
        self._essence_fn = essence_fn or get_morning_essence
        self._image_fn = image_fn or generate_image
        self._lock = threading.Lock()
        self._essence_ticket = 0
        self._image_ticket = 0
        self._last_task_id = 0
        self.state = DashboardState()

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            return self.state.snapshot()

    # ── Greeting ──

    def start(self, location: str | None = None) -> bool:
        """Begin a new session with the outcome of the geolocation attempt."""
        with self._lock:
            # Image replies requested in the previous session are stale.
            self._image_ticket += 1
            self.state = DashboardState(
                location=(location or "").strip(),
                location_attempted=True,
            )
        return self.refresh_essence()

    def refresh_essence(self) -> bool:
        """Request a new essence. Returns False if a newer request superseded it."""
        with self._lock:
            self._essence_ticket += 1
            ticket = self._essence_ticket
            self.state.essence_loading = True
            location = self.state.location or None

        essence = self._essence_fn(location)

        with self._lock:
            if ticket != self._essence_ticket:
                logger.debug("Dropping stale essence response (ticket %d)", ticket)
                return False
            self.state.essence = essence
            self.state.essence_loading = False
        return True

    # ── Image ──

    def generate_image(self, prompt: str) -> bool:
        """Request art for ``prompt``. A blank prompt is ignored."""
        if not prompt.strip():
            return False

        with self._lock:
            self._image_ticket += 1
            ticket = self._image_ticket
            self.state.image_prompt = prompt
            self.state.image_loading = True

        image = self._image_fn(prompt)

        with self._lock:
            if ticket != self._image_ticket:
                logger.debug("Dropping stale image response (ticket %d)", ticket)
                return False
            self.state.generated_image = image
            self.state.image_loading = False
        return True

    # ── Tasks ──

    def add_task(self, text: str) -> Task | None:
        if not text.strip():
            return None
        with self._lock:
            task = Task(id=self._next_task_id(), text=text, completed=False)
            self.state.tasks.append(task)
        return task

    def toggle_task(self, task_id: str) -> Task | None:
        with self._lock:
            for i, task in enumerate(self.state.tasks):
                if task.id == task_id:
                    toggled = dataclasses.replace(task, completed=not task.completed)
                    self.state.tasks[i] = toggled
                    return toggled
        return None

    def delete_task(self, task_id: str) -> bool:
        with self._lock:
            remaining = [t for t in self.state.tasks if t.id != task_id]
            if len(remaining) == len(self.state.tasks):
                return False
            self.state.tasks = remaining
        return True

    def _next_task_id(self) -> str:
        # Millisecond timestamps, bumped when two tasks land in the same ms.
        now_ms = time.time_ns() // 1_000_000
        self._last_task_id = max(now_ms, self._last_task_id + 1)
        return str(self._last_task_id)
