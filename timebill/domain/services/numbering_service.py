"""
Invoice number sequence.

Numbers look like ``INV-2024-000001``. The sequence only guarantees
uniqueness inside one process; across processes the invoice table's unique
constraint is the guard.
"""

import threading
from datetime import datetime
from typing import Callable, Collection, Optional

from timebill.domain.models.base import DuplicateEntityError, utcnow

Clock = Callable[[], datetime]


class InvoiceNumberSequence:
    """Per-process counter, restarted each year, that skips numbers already taken."""

    def __init__(
        self,
        prefix: str = "INV",
        clock: Optional[Clock] = None,
        max_attempts: int = 1000,
        start: int = 0
    ):
        self.prefix = prefix
        self.clock = clock or utcnow
        self.max_attempts = max_attempts
        self._start = start
        self._counter = start
        self._year: Optional[int] = None
        self._lock = threading.Lock()

    @property
    def current(self) -> int:
        return self._counter

    def format_number(self, year: int, counter: int) -> str:
        return f"{self.prefix}-{year}-{counter:06d}"

    def highest_taken(self, year: int, existing: Collection[str]) -> int:
        """Largest counter among ``existing`` numbers for this prefix and year."""
        marker = f"{self.prefix}-{year}-"
        highest = 0
        for number in existing:
            if not number.startswith(marker):
                continue
            suffix = number[len(marker):]
            if suffix.isdigit():
                highest = max(highest, int(suffix))
        return highest

    def next_number(self, existing: Collection[str] = ()) -> str:
        """
        Return the number after the highest one taken for the current year.

        The counter first jumps past every number in ``existing``, so a fresh
        process continues where stored invoices left off. Raises
        DuplicateEntityError after ``max_attempts`` collisions.
        """
        year = self.clock().year
        with self._lock:
            if year != self._year:
                self._year = year
                self._counter = self._start
            self._counter = max(self._counter, self.highest_taken(year, existing))
            number = self.format_number(year, self._counter)
            for _ in range(self.max_attempts):
                self._counter += 1
                number = self.format_number(year, self._counter)
                if number not in existing:
                    return number
        raise DuplicateEntityError("Invoice", "invoice_number", number)
