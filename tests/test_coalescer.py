"""
Tests for the Update Coalescer

Run with: pytest tests/test_coalescer.py -v
"""

from engine.coalescer import UpdateCoalescer


class TestUpdateCoalescer:
    """Test at-most-one pass per reading."""

    def setup_method(self):
        """Set up test fixtures."""
        self.coalescer = UpdateCoalescer("test")
        self.calls = []

    def step(self):
        self.calls.append(1)

    def test_first_call_runs(self):
        assert not self.coalescer.is_fresh
        assert self.coalescer.ensure_fresh(self.step) is True
        assert len(self.calls) == 1
        assert self.coalescer.tick == 1

    def test_repeated_calls_coalesce(self):
        for _ in range(10):
            self.coalescer.ensure_fresh(self.step)
        assert len(self.calls) == 1

    def test_reset_allows_next_pass(self):
        self.coalescer.ensure_fresh(self.step)
        self.coalescer.reset_for_next_reading()
        assert self.coalescer.ensure_fresh(self.step) is True
        assert len(self.calls) == 2
        assert self.coalescer.tick == 2

    def test_invalidate(self):
        self.coalescer.ensure_fresh(self.step)
        self.coalescer.invalidate()
        assert not self.coalescer.is_fresh

    def test_mark_fresh_counts_explicit_pass(self):
        self.coalescer.mark_fresh()
        assert self.coalescer.is_fresh
        assert self.coalescer.ensure_fresh(self.step) is False
        assert self.calls == []
        assert self.coalescer.tick == 1
