#!/usr/bin/env python3
"""
Delayed actions run from the frame loop.

Each action receives the game-clock time (ms) it runs at.

Actions are tagged with the reset epoch they were scheduled in. When they come
due after a reset has happened, they are dropped instead of run, so a crash
timer cannot reset a game that was already restarted.
"""
import logging
from dataclasses import dataclass
from typing import Callable, List

logger = logging.getLogger(__name__)


@dataclass
class DelayedAction:
    due_time: float  # ms on the game clock
    epoch: int
    action: Callable[[float], None]
    label: str = ""


class DelayedActionQueue:
    def __init__(self):
        self._pending: List[DelayedAction] = []

    def __len__(self) -> int:
        return len(self._pending)

    def schedule(self, now: float, delay_ms: float, epoch: int, action: Callable[[float], None],
                 label: str = "") -> DelayedAction:
        entry = DelayedAction(due_time=now + max(0.0, delay_ms), epoch=epoch, action=action, label=label)
        self._pending.append(entry)
        return entry

    def run_due(self, now: float, current_epoch: Callable[[], int]) -> int:
        """
        Run every action whose due time has passed. Returns how many actions ran.

        current_epoch is re-read before each action, since an action may itself reset
        the game. Actions from an older epoch are discarded when they come due.
        """
        due = [a for a in self._pending if a.due_time <= now]
        if not due:
            return 0
        self._pending = [a for a in self._pending if a.due_time > now]
        ran = 0
        for entry in sorted(due, key=lambda a: a.due_time):
            if entry.epoch != current_epoch():
                logger.debug("Dropping stale delayed action '%s' (epoch %d, now %d)",
                             entry.label, entry.epoch, current_epoch())
                continue
            entry.action(now)
            ran += 1
        return ran

    def clear(self) -> None:
        self._pending = []
