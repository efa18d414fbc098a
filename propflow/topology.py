from typing import TYPE_CHECKING

import networkx as nx

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterator


class Topology:
    """
    Dependency graph of a Flow. Edges point from a dependency to the task that
    depends on it; identifiers that are referenced but not configured have no node.
    """

    def __init__(self, *, digraph: "nx.DiGraph") -> None:
        self.digraph = digraph
        self._components: dict[str, int] = {
            node: index
            for index, component in enumerate(
                nx.strongly_connected_components(digraph)
            )
            for node in component
        }

    def dependents(self, identifier: str) -> "Iterator[str]":
        return self.digraph.successors(identifier)

    def in_cycle(self, identifier: str, dependency: str) -> bool:
        """
        Whether `dependency`, declared by `identifier`, depends back on it through
        any chain of tasks.
        """
        if identifier not in self._components or dependency not in self._components:
            return False

        # the edge dependency -> identifier exists, so a path back closes a cycle
        return (
            dependency == identifier
            or self._components[dependency] == self._components[identifier]
        )

    def __str__(self) -> str:
        return "\n".join(nx.generate_network_text(self.digraph, vertical_chains=True))
