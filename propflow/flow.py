"""
Flow module for the propflow framework.
"""

import logging
from typing import TYPE_CHECKING

import networkx as nx

from .task import normalize
from .topology import Topology

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Mapping
    from typing import Any

    from .task import TaskSpec

logger = logging.getLogger(__name__)


class Flow:
    def __init__(self, tasks: "dict[str, TaskSpec]") -> None:
        self.tasks = tasks

        # create a directed graph to represent the flow
        digraph = nx.DiGraph()

        # add all tasks as nodes
        for identifier, spec in tasks.items():
            digraph.add_node(identifier, spec=spec)

        # connect each configured dependency to the task that requires it
        for identifier, spec in tasks.items():
            for dependency in spec.dependencies:
                if dependency in tasks:
                    digraph.add_edge(dependency, identifier)

        self.topology = Topology(digraph=digraph)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("built flow with %d tasks:\n%s", len(tasks), self.topology)

    @classmethod
    def from_config(cls, flow_config: "Mapping[str, Any]") -> "Flow":
        return cls(
            tasks={
                identifier: normalize(identifier, entry)
                for identifier, entry in flow_config.items()
            }
        )

    @property
    def identifiers(self) -> list[str]:
        return list(self.tasks)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.tasks

    def __getitem__(self, identifier: str) -> "TaskSpec":
        return self.tasks[identifier]
