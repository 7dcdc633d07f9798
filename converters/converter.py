"""
Base class for converting a line-oriented input file into nanopublications.

A dataset adapter subclasses `RDFConverter` and implements the two row hooks:

- `convert_header_row(row)` is called for every line starting with `#`.
- `convert_row(row)` is called for every other non-blank line and builds the
  four context graphs of one nanopublication through `save()`, usually
  starting with `create_main_graph()`.

The converter does not know where the quads end up; that is up to the sink it
was given (see `converters.sinks`).
"""

from abc import ABC, abstractmethod
from pathlib import Path

from loguru import logger
from rdflib import Namespace

from converters.dispatcher import RowDispatcher, RunCounters
from converters.progress import DEFAULT_PROGRESS_INTERVAL, ProgressReporter
from converters.vocabularies import NP, RDF


class RDFConverter(ABC):
    def __init__(self, sink, progress_interval=DEFAULT_PROGRESS_INTERVAL):
        self.sink = sink
        self.reporter = ProgressReporter(progress_interval)
        self.counters = RunCounters()
        self.source = None

    @property
    def base(self) -> Namespace:
        return self.sink.base

    @property
    def line_number(self):
        return self.counters.line_number

    @property
    def row_index(self):
        return self.counters.row_index

    def iri(self, local_name):
        return self.base[str(local_name)]

    def convert(self, input_path):
        """
        Convert every line of `input_path` and finalize the sink.

        Args:
            input_path (str or Path): The line-oriented input file.

        Returns:
            RunCounters: line and row counts of the run.
        """
        input_path = Path(input_path)
        self.source = input_path
        dispatcher = RowDispatcher(
            header_hook=self.convert_header_row,
            row_hook=self.convert_row,
            reporter=self.reporter,
        )
        self.counters = dispatcher.counters
        logger.info(f"Converting {input_path} with {type(self).__name__}")
        with open(input_path, "r", encoding="utf-8") as f:
            dispatcher.dispatch(f)
        logger.info(
            f"Read {self.line_number} lines, converted {self.row_index} rows"
        )
        self.sink.finalize()
        return self.counters

    @abstractmethod
    def convert_header_row(self, row):
        """Handle a header line, e.g. to capture the column order."""

    @abstractmethod
    def convert_row(self, row):
        """Turn one data line into the context graphs of a nanopublication."""

    def save(self, context, triples):
        return self.sink.save(context, triples)

    def create_main_graph(self, nanopub, assertion, provenance, publication_info):
        """Save the head graph linking a nanopublication to its three graphs."""
        return self.save(
            nanopub,
            [
                (nanopub, RDF.type, NP.Nanopublication),
                (nanopub, NP.hasAssertion, assertion),
                (nanopub, NP.hasProvenance, provenance),
                (nanopub, NP.hasPublicationInfo, publication_info),
            ],
        )
