"""
Command-line interface for alncut.
"""

import argparse
import logging
import shlex
import sys
from typing import Callable, List, Optional

from . import __version__
from .config import AlncutConfig
from .cutoff import validate_frequency
from .errors import AlncutError
from .io_utils import SUPPORTED_FORMATS, WRITABLE_FORMATS, validate_moltype
from .pipeline import process_inputs

DEFAULT_LOGNAME = "FAST.log.txt"


def setup_logging(verbose: bool = False):
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def log_invocation(logname: str, argv: List[str], comment: Optional[str] = None):
    """Append the command line (and an optional comment) to an invocation logfile."""
    invocation_logger = logging.getLogger("alncut.invocation")
    invocation_logger.setLevel(logging.INFO)
    invocation_logger.propagate = False

    handler = logging.FileHandler(logname)
    handler.setFormatter(logging.Formatter('%(asctime)s - %(message)s', datefmt='%Y-%m-%d %H:%M:%S'))
    invocation_logger.addHandler(handler)
    try:
        message = " ".join(shlex.quote(arg) for arg in argv)
        if comment:
            message = f"{message} # {comment}"
        invocation_logger.info(message)
    finally:
        invocation_logger.removeHandler(handler)
        handler.close()


def _argument_type(func: Callable) -> Callable:
    """Adapt a validator so argparse reports its error message."""
    def convert(value):
        try:
            return func(value)
        except AlncutError as e:
            raise argparse.ArgumentTypeError(str(e))
    convert.__name__ = func.__name__
    return convert


def build_parser() -> argparse.ArgumentParser:
    """Build the alncut argument parser."""
    parser = argparse.ArgumentParser(
        prog='alncut',
        description='alncut: select alignment columns by variation and gap content',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  alncut data.fas                      # Invariant sites
  alncut -f 2 data.fas                 # Sites with at most 2 deviating sequences
  alncut -v -f 0.1 data.fas            # Sites more than 10% variable
  alncut -g data.fas                   # Gap-free sites
  alncut -a -v data.fas                # Remove all-gap sites
  alncut -p -V data.fas 2> sites.txt   # Parsimony-informative sites, report indices
  alncut -r stockholm --outformat fasta families.sto
        """
    )

    parser.add_argument(
        'inputs',
        nargs='*',
        help='Input alignment files (default: read standard input; "-" also reads standard input)'
    )

    # Classification modes
    parser.add_argument(
        '-g', '--gapfree',
        action='store_true',
        help='Select gap-free sites (or sites with gap frequency within --frequency)'
    )
    parser.add_argument(
        '-a', '--allgap',
        action='store_true',
        help='Select all-gap sites (takes precedence over --gapfree)'
    )
    parser.add_argument(
        '-p', '--parsinf',
        action='store_true',
        help='Select parsimoniously informative sites (takes precedence over --allgap and --gapfree)'
    )
    parser.add_argument(
        '-v', '--negate',
        action='store_true',
        help='Invert the selection, e.g. variable instead of invariant sites'
    )
    parser.add_argument(
        '-f', '--frequency',
        type=_argument_type(validate_frequency),
        default=None,
        help='Tolerated deviation: an integer count of sequences, or a fraction between 0 and 1 '
             '(default: none tolerated)'
    )
    parser.add_argument(
        '-V', '--verbose',
        action='store_true',
        help='Report matching sites on standard error and enable debug logging'
    )

    # Formats
    parser.add_argument(
        '-r', '--format',
        choices=SUPPORTED_FORMATS,
        default='fasta',
        help='Input alignment format (default: fasta)'
    )
    parser.add_argument(
        '--outformat',
        choices=WRITABLE_FORMATS,
        help='Output alignment format (default: same as input, fasta for read-only formats)'
    )
    parser.add_argument(
        '-m', '--moltype',
        type=_argument_type(validate_moltype),
        help='Molecule type of the input: dna, rna or protein'
    )

    # Invocation log
    parser.add_argument(
        '-l', '--log',
        action='store_true',
        help='Append this invocation to a logfile'
    )
    parser.add_argument(
        '-L', '--logname',
        default=DEFAULT_LOGNAME,
        help=f'Name of the invocation logfile (default: {DEFAULT_LOGNAME})'
    )
    parser.add_argument(
        '-C', '--comment',
        help='Comment to add to the invocation logfile'
    )

    parser.add_argument(
        '--progress',
        action='store_true',
        help='Show a progress bar over input files'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    return parser


def main(argv: Optional[List[str]] = None):
    """Main entry point for the alncut CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    try:
        config = AlncutConfig.from_args(args)
    except (AlncutError, ValueError) as e:
        parser.error(str(e))

    if args.log:
        command = sys.argv if argv is None else [parser.prog] + list(argv)
        log_invocation(args.logname, command, args.comment)

    try:
        summary = process_inputs(args.inputs, config)

        if summary.files_missing:
            logging.debug(f"Skipped {summary.files_missing} missing input file(s)")
        logging.debug(f"Wrote {summary.records_written} filtered alignment(s)")

        if not summary.ok:
            logging.error(f"{summary.files_failed} input file(s) could not be processed")
            sys.exit(1)

    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        sys.exit(1)
    except Exception as e:
        logging.error(f"Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
