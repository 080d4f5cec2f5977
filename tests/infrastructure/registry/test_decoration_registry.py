"""Tests for DecorationRegistry."""

import gc
import threading

from method_timing.infrastructure.registry import DecorationRegistry


class Report:
    """Owner type."""


class SubReport(Report):
    """Subclass of owner type."""


class TestDecorationMarks:
    """Test (owner, method) marks."""

    def test_not_decorated_initially(self):
        """Test fresh registry knows nothing."""
        assert DecorationRegistry().is_decorated(Report, "render") is False

    def test_mark_is_idempotent(self):
        """Test repeat marks are no-ops, not errors."""
        registry = DecorationRegistry()

        assert registry.mark_decorated(Report, "render") is True
        assert registry.mark_decorated(Report, "render") is False
        assert registry.is_decorated(Report, "render") is True

    def test_marks_scoped_per_type(self):
        """Test a mark on a base type does not mark the subtype."""
        registry = DecorationRegistry()
        registry.mark_decorated(Report, "render")

        assert registry.is_decorated(SubReport, "render") is False

    def test_forget(self):
        """Test forgetting removes the mark."""
        registry = DecorationRegistry()
        registry.mark_decorated(Report, "render")

        registry.forget(Report, "render")
        registry.forget(Report, "never_marked")

        assert registry.is_decorated(Report, "render") is False

    def test_decorated_names(self):
        """Test names are listed per owner."""
        registry = DecorationRegistry()
        registry.mark_decorated(Report, "render")
        registry.mark_decorated(Report, "save")

        assert registry.decorated_names(Report) == frozenset({"render", "save"})
        assert registry.decorated_names(SubReport) == frozenset()

    def test_types_weakly_referenced(self):
        """Test registering a class does not keep it alive."""
        registry = DecorationRegistry()

        class Temporary:
            pass

        registry.mark_decorated(Temporary, "run")
        registry.attach(Temporary)
        del Temporary
        gc.collect()

        assert len(registry._decorated) == 0
        assert len(registry._attached) == 0

    def test_check_and_mark_atomic_across_threads(self):
        """Test exactly one thread wins a concurrent check-and-mark."""
        registry = DecorationRegistry()
        barrier = threading.Barrier(16)
        winners = []

        def worker():
            barrier.wait()
            if registry.check_and_mark(Report, "render"):
                winners.append(threading.get_ident())

        threads = [threading.Thread(target=worker) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(winners) == 1


class TestAttachedTypes:
    """Test auto-apply attachment bookkeeping."""

    def test_attach_once(self):
        """Test attach reports only the first attachment."""
        registry = DecorationRegistry()

        assert registry.attach(Report) is True
        assert registry.attach(Report) is False
        assert registry.is_attached(Report) is True

    def test_attached_ancestor(self):
        """Test nearest attached base is found."""
        registry = DecorationRegistry()
        registry.attach(Report)

        assert registry.attached_ancestor(SubReport) is Report
        assert registry.attached_ancestor(Report) is None
        assert registry.is_attached(SubReport) is False
