"""
Sinks receive the context graphs built by a converter.

Two sinks are provided:
- FileSink keeps every context graph in memory and writes each one to its own
  TriG file when the run is finalized.
- StoreSink inserts every quad straight into a remote repository as soon as it
  is saved, so it has nothing left to do at the end of the run.

Both accept triples whose terms are rdflib terms or plain strings. Strings
starting with one of the IRI_SCHEMES (e.g. `http:` or `urn:`) are taken as
absolute IRIs; any other string, including one with a colon such as `HTT:1`,
is a local name under the sink's base IRI.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union
from urllib.parse import urlparse

from loguru import logger
from rdflib import Dataset, Graph, Namespace, URIRef
from rdflib.term import Identifier

from converters.context_registry import ContextRegistry
from converters.errors import (
    ConfigurationError,
    RepositoryNotEmptyError,
    SinkFinalizedError,
)
from converters.vocabularies import DEFAULT_PREFIXES

Term = Union[Identifier, str]
Triple = Tuple[Term, Term, Term]

OUTPUT_SUFFIX = ".ttl"
IRI_SCHEMES = ("http", "https", "urn", "ftp", "file", "mailto")


def resolve_term(term: Term, base: Namespace) -> Identifier:
    """Turn a plain string into an IRI; rdflib terms are returned unchanged."""
    if isinstance(term, Identifier):
        return term
    if not isinstance(term, str):
        raise TypeError(f"Cannot resolve {term!r} into an RDF term.")
    if urlparse(term).scheme.lower() in IRI_SCHEMES:
        return URIRef(term)
    return base[term]


class Sink(ABC):
    """Destination for the context graphs of a conversion run."""

    def __init__(self, base: Union[str, Namespace]) -> None:
        self.base = Namespace(str(base))

    def resolve(self, term: Term) -> Identifier:
        return resolve_term(term, self.base)

    @abstractmethod
    def save(self, context: Term, triples: Iterable[Triple]) -> None:
        """Associate every triple with the context graph `context`."""
        raise NotImplementedError(
            f"{type(self).__name__} does not implement save()."
        )

    def finalize(self):
        """Flush whatever the sink still holds. Called once at end of run."""
        return None


class FileSink(Sink):
    def __init__(
        self,
        output: str,
        base: Union[str, Namespace],
        prefixes: Optional[Dict[str, Namespace]] = None,
    ) -> None:
        super().__init__(base)
        if not output:
            raise ConfigurationError("The file sink requires an output prefix.")
        self.output = str(output)
        self.prefixes = dict(DEFAULT_PREFIXES if prefixes is None else prefixes)
        self.registry = ContextRegistry()

    def output_path(self, key: int) -> Path:
        return Path(f"{self.output}{key}{OUTPUT_SUFFIX}")

    def save(self, context: Term, triples: Iterable[Triple]) -> int:
        """Buffer the triples as a new context graph; returns its key."""
        ctx = self.resolve(context)
        graph = Graph(identifier=ctx)
        for s, p, o in triples:
            graph.add((self.resolve(s), self.resolve(p), self.resolve(o)))
        return self.registry.add(graph)

    def _dataset_for(self, graph: Graph) -> Dataset:
        dataset = Dataset()
        for prefix, namespace in self.prefixes.items():
            dataset.bind(prefix, namespace, override=True)
        dataset.bind("", self.base, override=True)
        named = dataset.graph(graph.identifier)
        for triple in graph:
            named.add(triple)
        return dataset

    def finalize(self) -> List[Path]:
        """
        Serialize every buffered context graph to its own TriG file.

        Files are named `<output><key>.ttl` and written one after the other.
        A failure stops the remaining writes; files already written are kept.

        Returns:
            list: The paths written, in key order.
        """
        if self.registry.drained:
            raise SinkFinalizedError("The file sink was already finalized.")
        logger.info(
            f"Writing {len(self.registry)} context graphs with prefix "
            f"{self.output}"
        )
        written = []
        for key, graph in self.registry.drain():
            path = self.output_path(key)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._dataset_for(graph).serialize(
                destination=str(path), format="trig", base=str(self.base)
            )
            logger.debug(f"Wrote context {graph.identifier} to {path}")
            written.append(path)
        logger.info(f"Wrote {len(written)} files")
        return written


class StoreSink(Sink):
    """
    Writes quads synchronously into a remote repository.

    The repository is checked when the sink is built: with `clean` it is
    cleared, otherwise a non-empty repository is refused unless `append` is
    set. `append` only allows the import to proceed; nothing is deduplicated.
    """

    def __init__(self, repository, base, clean=False, append=False):
        super().__init__(base)
        self.repository = repository
        self.inserted = 0
        if clean:
            logger.info("Clearing repository before import")
            repository.clear()
        else:
            size = repository.size()
            if size > 0 and not append:
                raise RepositoryNotEmptyError(size)
            if size > 0:
                logger.warning(f"Appending to a non-empty repository (size = {size})")

    def save(self, context, triples):
        ctx = self.resolve(context)
        for s, p, o in triples:
            self.repository.insert(
                (self.resolve(s), self.resolve(p), self.resolve(o), ctx)
            )
            self.inserted += 1
        logger.debug(f"Inserted context {ctx} ({self.inserted} quads so far)")
