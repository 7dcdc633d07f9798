"""
Converter for delimited association tables.

The input is a delimited text file (tab separated by default) whose header
line lists the column names:

    #gene<TAB>disease<TAB>score<TAB>pmid
    HTT<TAB>Huntington disease<TAB>0.9<TAB>8458085

Only the first header line names the columns. Shebang style `#!` lines and
any `#` line after the column header are treated as comments.

Every data row becomes one nanopublication. Its assertion graph describes an
association resource carrying one `hda:<column>` literal per non-empty field,
its provenance graph points at the input file and its publication info graph
records the version of the conversion and, optionally, who created it.
"""

from loguru import logger
from rdflib import Literal

from converters.converter import RDFConverter
from converters.progress import DEFAULT_PROGRESS_INTERVAL
from converters.vocabularies import HDA, PAV, PROV, RDF, SIO
from utils.string_utils import sanitise_local_name, strip_header_prefix

DEFAULT_DELIMITER = "\t"
DEFAULT_VERSION = "1.0"
SHEBANG_PREFIX = "#!"

# sio:SIO_000897 is "association"
ASSOCIATION_CLASS = SIO["SIO_000897"]


class TabularAssociationConverter(RDFConverter):
    def __init__(
        self,
        sink,
        delimiter=DEFAULT_DELIMITER,
        version=DEFAULT_VERSION,
        creator=None,
        progress_interval=DEFAULT_PROGRESS_INTERVAL,
    ):
        super().__init__(sink, progress_interval=progress_interval)
        self.delimiter = delimiter
        self.version = version
        self.creator = creator
        self.columns = None

    def convert_header_row(self, row):
        if row.startswith(SHEBANG_PREFIX):
            logger.debug(f"Ignoring shebang line: {row}")
            return
        if self.columns is not None:
            logger.debug(f"Ignoring comment line {self.line_number}: {row}")
            return
        self.columns = [
            column.strip()
            for column in strip_header_prefix(row).split(self.delimiter)
        ]
        logger.info(f"Columns: {self.columns}")

    def split_row(self, row):
        """
        Return (column, value) pairs for a data row.

        Rows arrive with trailing whitespace stripped, so empty trailing
        fields of a tab separated row are missing; they are padded back as
        empty values. A row with more fields than columns is an error.
        """
        fields = row.split(self.delimiter)
        if self.columns is None:
            columns = [f"column_{i}" for i in range(len(fields))]
        elif len(fields) > len(self.columns):
            raise ValueError(
                f"Line {self.line_number} has {len(fields)} fields, expected "
                f"{len(self.columns)} ({', '.join(self.columns)})."
            )
        else:
            columns = self.columns
            fields += [""] * (len(columns) - len(fields))
        return [(column, value.strip()) for column, value in zip(columns, fields)]

    def convert_row(self, row):
        n = self.row_index
        fields = self.split_row(row)

        nanopub = self.iri(f"nanopub_{n}")
        assertion = self.iri(f"nanopub_{n}_assertion")
        provenance = self.iri(f"nanopub_{n}_provenance")
        publication_info = self.iri(f"nanopub_{n}_publication_info")
        association = self.iri(f"association_{n}")

        self.create_main_graph(nanopub, assertion, provenance, publication_info)

        assertion_triples = [(association, RDF.type, ASSOCIATION_CLASS)]
        for column, value in fields:
            if value:
                assertion_triples.append(
                    (association, HDA[sanitise_local_name(column)], Literal(value))
                )
        self.save(assertion, assertion_triples)

        source_name = self.source.name if self.source else "input"
        source = self.iri(sanitise_local_name(source_name))
        self.save(provenance, [(assertion, PROV.wasDerivedFrom, source)])

        publication_triples = [(nanopub, PAV.version, Literal(self.version))]
        if self.creator:
            publication_triples.append(
                (nanopub, PAV.createdBy, Literal(self.creator))
            )
        self.save(publication_info, publication_triples)
