import threading
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional


class SlotState(Enum):
    EMPTY = 'empty'
    NOT_READY = 'not_ready'
    READY = 'ready'


@dataclass(frozen=True)
class SlotView:
    connected: bool
    ready: bool

    def to_dict(self) -> Dict[str, bool]:
        return {'connected': self.connected, 'ready': self.ready}


class SlotRegistry:
    """Process-wide table of player slots.

    Each accessor runs under a single lock so two connections can never be
    handed the same slot. Callers only ever hold a slot index; the state
    behind it is read and written through these methods.
    """

    def __init__(self, size: int = 2):
        self._lock = threading.Lock()
        self._slots: List[SlotState] = [SlotState.EMPTY] * size

    def __len__(self) -> int:
        return len(self._slots)

    def _valid(self, index: int) -> bool:
        return isinstance(index, int) and 0 <= index < len(self._slots)

    def assign(self) -> Optional[int]:
        """Claim the lowest-index empty slot, or return None when full."""
        with self._lock:
            for index, state in enumerate(self._slots):
                if state is SlotState.EMPTY:
                    self._slots[index] = SlotState.NOT_READY
                    return index
            return None

    def set_ready(self, index: int) -> None:
        with self._lock:
            # a late ready for a released slot must not bring it back
            if self._valid(index) and self._slots[index] is not SlotState.EMPTY:
                self._slots[index] = SlotState.READY

    def release(self, index: int) -> None:
        with self._lock:
            if self._valid(index):
                self._slots[index] = SlotState.EMPTY

    def state(self, index: int) -> SlotState:
        with self._lock:
            return self._slots[index]

    def occupied(self) -> int:
        with self._lock:
            return sum(1 for state in self._slots if state is not SlotState.EMPTY)

    def snapshot(self) -> List[SlotView]:
        with self._lock:
            return [
                SlotView(connected=state is not SlotState.EMPTY, ready=state is SlotState.READY)
                for state in self._slots
            ]
