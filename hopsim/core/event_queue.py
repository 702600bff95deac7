"""Event queue implementation for discrete event simulation."""

import heapq
import itertools
from enum import Enum
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


class EventType(Enum):
    """Types of events in the M/M/1 simulation."""
    ARRIVAL = "arrival"
    DEPARTURE = "departure"


@dataclass(frozen=True, order=True)
class SimulationEvent:
    """Event in the discrete event simulation.

    Attributes:
        time: Virtual time at which the event fires (seconds)
        event_type: Arrival or departure
        request_id: Request the event belongs to
    """
    time: float
    event_type: EventType = field(compare=False)
    request_id: int = field(compare=False)

    def __post_init__(self):
        """Validate event after initialization."""
        if self.time < 0:
            raise ValueError("Event time cannot be negative")


class EventQueue:
    """Min-heap of simulation events keyed on event time.

    Events at the same time are returned in the order they were pushed,
    so a run is reproducible for a fixed random seed.
    """

    def __init__(self):
        """Initialize empty event queue."""
        self._queue: List[Tuple[float, int, SimulationEvent]] = []
        self._sequence = itertools.count()

    def push(self, event: SimulationEvent) -> None:
        """Add event to the queue.

        Args:
            event: Event to add
        """
        heapq.heappush(self._queue, (event.time, next(self._sequence), event))

    def pop(self) -> SimulationEvent:
        """Remove and return the earliest event.

        Returns:
            Event with the smallest time

        Raises:
            IndexError: If queue is empty
        """
        if self.is_empty():
            raise IndexError("Cannot pop from empty event queue")
        return heapq.heappop(self._queue)[2]

    def peek(self) -> Optional[SimulationEvent]:
        """Return the earliest event without removing it.

        Returns:
            Next event, or None if queue is empty
        """
        return self._queue[0][2] if self._queue else None

    def is_empty(self) -> bool:
        """Check if queue is empty."""
        return len(self._queue) == 0

    def size(self) -> int:
        """Get number of events in queue."""
        return len(self._queue)

    def clear(self) -> None:
        """Remove all events from queue."""
        self._queue.clear()

    def __len__(self) -> int:
        return len(self._queue)

    def __repr__(self) -> str:
        return f"EventQueue(size={len(self._queue)}, next={self.peek()})"
