import pytest

from propflow import (
    CyclicDependencyError,
    ErrorKind,
    Flow,
    InvalidTaskSpecError,
    NonExistentDependencyError,
)
from propflow.validation import validate


def _fn(results):
    return results


def test_flow_topology():
    flow = Flow.from_config({"a": 1, "b": ["a", _fn], "c": ["a", "b", _fn]})

    assert flow.identifiers == ["a", "b", "c"]
    assert set(flow.topology.dependents("a")) == {"b", "c"}
    assert not flow.topology.in_cycle("c", "a")
    assert not flow.topology.in_cycle("b", "a")
    assert str(flow.topology)


def test_flow_invalid_entry():
    with pytest.raises(InvalidTaskSpecError):
        Flow.from_config({"a": ["b", "c"]})


def test_validation_passes():
    flow = Flow.from_config({"a": 1, "b": ["a", _fn]})

    validate(flow, "a")
    validate(flow, "b")


def test_validation_failure_non_existent():
    flow = Flow.from_config({"a": ["b", "c", "b", _fn], "c": 1})

    with pytest.raises(NonExistentDependencyError) as exc_info:
        validate(flow, "a")

    assert exc_info.value.code == 0
    assert exc_info.value.kind is ErrorKind.NON_EXISTENT_DEPENDENCY
    assert exc_info.value.data == ["b"]
    assert exc_info.value.name == "Flow Error: Non existent dependencies"


def test_validation_failure_non_existent_before_cyclic():
    flow = Flow.from_config({"a": ["b", "missing", _fn], "b": ["a", _fn]})

    with pytest.raises(NonExistentDependencyError):
        validate(flow, "a")


@pytest.mark.parametrize(
    "flow_config, offending",
    (
        ({"a": ["b", _fn], "b": ["a", _fn]}, ["b"]),
        ({"a": ["a", _fn]}, ["a"]),
        ({"a": ["b", _fn], "b": ["c", _fn], "c": ["a", _fn]}, ["b"]),
        ({"a": ["x", "b", _fn], "b": ["a", _fn], "x": 1}, ["b"]),
    ),
    ids=("mutual", "self", "transitive", "partial"),
)
def test_validation_failure_cyclic(flow_config, offending):
    flow = Flow.from_config(flow_config)

    with pytest.raises(CyclicDependencyError) as exc_info:
        validate(flow, "a")

    assert exc_info.value.code == 1
    assert exc_info.value.data == offending
    assert "Cyclic dependencies for task 'a'" in str(exc_info.value)


def test_validation_ignores_unrelated_cycles():
    flow = Flow.from_config({"a": 1, "b": ["c", _fn], "c": ["b", _fn]})

    validate(flow, "a")
