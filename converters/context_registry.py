from typing import Dict, Iterator, Tuple

from loguru import logger
from rdflib import Graph

from converters.errors import SinkFinalizedError


class ContextRegistry:
    """
    Holds the context graphs produced during a run, keyed by creation order.

    Keys are dense integers starting at 0 and are handed out strictly in the
    order graphs are added. Graphs are never replaced once stored. The
    registry is drained exactly once, after which it refuses new graphs.
    """

    def __init__(self) -> None:
        self._graphs: Dict[int, Graph] = {}
        self._next_key = 0
        self._drained = False

    def __len__(self) -> int:
        return len(self._graphs)

    def __contains__(self, key: int) -> bool:
        return key in self._graphs

    def __getitem__(self, key: int) -> Graph:
        return self._graphs[key]

    @property
    def next_key(self) -> int:
        return self._next_key

    @property
    def drained(self) -> bool:
        return self._drained

    def add(self, graph: Graph) -> int:
        """Store `graph` under the next key and return that key."""
        if self._drained:
            raise SinkFinalizedError(
                f"Cannot add context {graph.identifier} to a drained registry."
            )
        key = self._next_key
        self._graphs[key] = graph
        self._next_key += 1
        logger.debug(f"Registered context {graph.identifier} under key {key}")
        return key

    def drain(self) -> Iterator[Tuple[int, Graph]]:
        """
        Yield every (key, graph) pair in key order and empty the registry.

        The registry is marked drained as soon as iteration starts, so a
        failure part way through still leaves it closed.
        """
        if self._drained:
            raise SinkFinalizedError("Context registry was already drained.")
        self._drained = True
        graphs, self._graphs = self._graphs, {}
        for key in range(len(graphs)):
            yield key, graphs[key]
