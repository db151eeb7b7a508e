"""
Unit tests for the invoice number sequence.
"""

from datetime import datetime

import pytest

from timebill.domain.models.base import DuplicateEntityError
from timebill.domain.services.numbering_service import InvoiceNumberSequence
from tests.helpers import FakeClock


class TestInvoiceNumberSequence:
    def setup_method(self):
        self.sequence = InvoiceNumberSequence(prefix="INV", clock=FakeClock(datetime(2024, 5, 1)))

    def test_format(self):
        assert self.sequence.next_number() == "INV-2024-000001"
        assert self.sequence.current == 1

    def test_distinct_numbers(self):
        numbers = [self.sequence.next_number() for _ in range(50)]
        assert len(set(numbers)) == 50

    def test_skips_taken_numbers(self):
        taken = {"INV-2024-000001", "INV-2024-000002"}
        assert self.sequence.next_number(taken) == "INV-2024-000003"

    def test_sequences_are_independent(self):
        other = InvoiceNumberSequence(clock=FakeClock(datetime(2024, 5, 1)))
        self.sequence.next_number()
        assert other.next_number() == "INV-2024-000001"

    def test_fresh_sequence_continues_after_stored_numbers(self):
        taken = {self.sequence.format_number(2024, n) for n in range(1, 1001)}

        assert self.sequence.next_number(taken) == "INV-2024-001001"

    def test_only_matching_prefix_and_year_count(self):
        taken = {"INV-2023-000500", "CR-2024-000400", "INV-2024-000002", "INV-2024-draft"}

        assert self.sequence.next_number(taken) == "INV-2024-000003"

    def test_counter_restarts_in_a_new_year(self):
        clock = FakeClock(datetime(2024, 12, 31, 23))
        sequence = InvoiceNumberSequence(clock=clock)
        sequence.next_number({"INV-2024-000041"})

        clock.advance(hours=2)

        assert sequence.next_number({"INV-2024-000042"}) == "INV-2025-000001"

    def test_gives_up_after_max_attempts(self):
        class EverythingTaken(set):
            def __contains__(self, number):
                return True

        sequence = InvoiceNumberSequence(clock=FakeClock(datetime(2024, 5, 1)), max_attempts=3)

        with pytest.raises(DuplicateEntityError):
            sequence.next_number(EverythingTaken())
        assert sequence.current == 3
