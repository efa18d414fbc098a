import pytest

from propflow.aggregator import aggregate
from propflow.context import ResolutionContext, TaskState
from propflow.exceptions import UnresolvedTaskError


def test_claim_once():
    context = ResolutionContext()

    handle = context.claim("a")

    assert handle is not None
    assert context.claim("a") is None
    assert context.in_flight == {"a": handle}
    assert context.state("a") is TaskState.COMPUTING
    assert context.running == 1


def test_store_resolves_once():
    context = ResolutionContext()
    context.store("a", None)

    assert context.is_resolved("a")
    assert context.state("a") is TaskState.RESOLVED

    with pytest.raises(RuntimeError, match="Task 'a' has already been resolved"):
        context.store("a", "other")

    assert context.results["a"] is None


def test_fail_keeps_first_failure():
    context = ResolutionContext()
    first, second = ValueError("first"), ValueError("second")

    context.fail("a", first)
    context.fail("b", second)

    assert context.failure is first
    assert context.state("b") is TaskState.FAILED
    assert not context.is_resolved("a")


def test_aggregate():
    context = ResolutionContext()
    context.store("a", 1)
    context.store("b", None)

    assert aggregate(["b", "a"], context) == {"b": None, "a": 1}


def test_aggregate_unresolved():
    context = ResolutionContext()
    context.store("a", 1)
    context.claim("b")

    with pytest.raises(UnresolvedTaskError, match="Task 'b' must be resolved"):
        aggregate(["a", "b"], context)
