"""
Convert a delimited association table into nanopublications.

Two output modes are available as subcommands:
- file: every context graph is written to its own TriG file named
  `<output><N>.ttl`.
- store: every quad is inserted into an AllegroGraph repository.

Command Line Arguments (shared):
- --input / -i: Path to the line-oriented input file.
- --base-url, --dataset: The base IRI is `<base-url>/<dataset>/`.
- --progress-interval: Data rows between two running time log lines.
- --delimiter, --creator, --version-label: Options of the tabular converter.
- --log-file, --log-level: Logging configuration.

Environment Variables (read from a `.env` file when present):
- NANOPUB_BASE_URL: Default for --base-url.
- NANOPUB_STORE_HOST, NANOPUB_STORE_PORT: Defaults for --host and --port.
- NANOPUB_STORE_USERNAME, NANOPUB_STORE_PASSWORD: Store credentials.

Usage:
    nanopub-convert file --input data/hd.tsv --output out/np
    nanopub-convert store --input data/hd.tsv --repository hd --clean
"""

import argparse
import os
import sys

from dotenv import load_dotenv
from loguru import logger

from converters.allegrograph import DEFAULT_HOST, DEFAULT_PORT, AllegroGraphRepository
from converters.errors import RepositoryNotEmptyError
from converters.progress import DEFAULT_PROGRESS_INTERVAL
from converters.sinks import FileSink, StoreSink
from converters.tabular import (
    DEFAULT_DELIMITER,
    DEFAULT_VERSION,
    TabularAssociationConverter,
)

DEFAULT_BASE_URL = "http://rdf.biosemantics.org/data"
DEFAULT_DATASET = "HD_associations"


def non_negative_int(value):
    """argparse type for counts where 0 is allowed but negatives are not."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be zero or positive, got {number}")
    return number


def parse_args(argv=None):
    load_dotenv()

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-i", "--input", required=True, help="Path to the input file."
    )
    common.add_argument(
        "--base-url",
        default=os.getenv("NANOPUB_BASE_URL", DEFAULT_BASE_URL),
        help="Base URL the dataset IRIs are minted under.",
    )
    common.add_argument(
        "--dataset",
        default=DEFAULT_DATASET,
        help="Dataset path appended to the base URL.",
    )
    common.add_argument(
        "--progress-interval",
        type=non_negative_int,
        default=DEFAULT_PROGRESS_INTERVAL,
        help="Log the running time every N data rows, 0 disables it.",
    )
    common.add_argument(
        "--delimiter", default=DEFAULT_DELIMITER, help="Column delimiter."
    )
    common.add_argument(
        "--creator", default=None, help="Recorded as pav:createdBy."
    )
    common.add_argument(
        "--version-label", default=DEFAULT_VERSION, help="Recorded as pav:version."
    )
    common.add_argument("--log-file", default=None, help="Path to a logfile.")
    common.add_argument("--log-level", default="INFO", help="Logging level.")

    parser = argparse.ArgumentParser(
        description="Convert a delimited association table into "
        "nanopublications."
    )
    subparsers = parser.add_subparsers(dest="mode", required=True)

    file_parser = subparsers.add_parser(
        "file", parents=[common], help="Write one TriG file per context graph."
    )
    file_parser.add_argument(
        "-o",
        "--output",
        required=True,
        help="Output prefix; '<N>.ttl' is appended for each context graph.",
    )

    store_parser = subparsers.add_parser(
        "store", parents=[common], help="Insert quads into AllegroGraph."
    )
    store_parser.add_argument(
        "--host",
        default=os.getenv("NANOPUB_STORE_HOST", DEFAULT_HOST),
        help="AllegroGraph host, default=localhost",
    )
    store_parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("NANOPUB_STORE_PORT", DEFAULT_PORT)),
        help="default=10035",
    )
    store_parser.add_argument("--catalog", default=None)
    store_parser.add_argument("--repository", required=True)
    store_parser.add_argument(
        "--username", default=os.getenv("NANOPUB_STORE_USERNAME")
    )
    store_parser.add_argument(
        "--password", default=os.getenv("NANOPUB_STORE_PASSWORD")
    )
    store_parser.add_argument(
        "--clean",
        action="store_true",
        help="Clear the repository before import.",
    )
    store_parser.add_argument(
        "--append",
        action="store_true",
        help="Allow adding new triples to a non-empty triple store.",
    )

    return parser.parse_args(argv)


def configure_logging(log_level, log_file=None):
    logger.remove()
    logger.add(sys.stderr, level=log_level)
    if log_file:
        logger.add(log_file, rotation="500 MB", level=log_level)
        logger.info(f"Logfile will be saved in: {log_file}")


def base_iri(base_url, dataset):
    return f"{base_url.rstrip('/')}/{dataset.strip('/')}/"


def build_converter(args, sink):
    return TabularAssociationConverter(
        sink,
        delimiter=args.delimiter,
        version=args.version_label,
        creator=args.creator,
        progress_interval=args.progress_interval,
    )


def run_file(args):
    sink = FileSink(args.output, base_iri(args.base_url, args.dataset))
    build_converter(args, sink).convert(args.input)


def run_store(args):
    with AllegroGraphRepository(
        args.repository,
        host=args.host,
        port=args.port,
        catalog=args.catalog,
        username=args.username,
        password=args.password,
    ) as repository:
        sink = StoreSink(
            repository,
            base_iri(args.base_url, args.dataset),
            clean=args.clean,
            append=args.append,
        )
        build_converter(args, sink).convert(args.input)
        logger.info(f"Inserted {sink.inserted} quads into {repository.url}")


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.log_level, args.log_file)
    logger.info(f"Input file path is: {args.input}")
    try:
        if args.mode == "file":
            run_file(args)
        else:
            run_store(args)
    except RepositoryNotEmptyError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
