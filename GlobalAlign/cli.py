"""Command-line interface for GlobalAlign."""

import argparse
import logging
import sys

from GlobalAlign.config import ConfigurationError, get_config_loader
from GlobalAlign.exceptions import AlignmentError
from GlobalAlign.seq_alignment import PairwiseAligner, plot_score_grid, render_score_grid, render_traceback_grid


def setup_logging(log_path=None, log_level=logging.INFO):
    """Set up the logging configuration."""
    if log_path:
        logging.basicConfig(filename=log_path, level=log_level)
        logging.getLogger().addHandler(logging.StreamHandler())
    else:
        logging.basicConfig(level=log_level)
    return logging.getLogger(__name__)


def read_fasta(path: str) -> str:
    """Sequence of the first record in a FASTA file (header lines start with '>')."""
    chunks = []
    seen_header = False
    with open(path, "r") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            if line.startswith(">"):
                if seen_header:
                    break
                seen_header = True
                continue
            chunks.append(line)
    if not chunks:
        raise ValueError(f"No sequence found in FASTA file {path}")
    return "".join(chunks)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="globalalign",
        description="Global (Needleman-Wunsch) alignment of two sequences."
    )
    parser.add_argument("seq1", nargs="?", help="First sequence.")
    parser.add_argument("seq2", nargs="?", help="Second sequence.")
    parser.add_argument("--fasta1", help="Read the first sequence from a FASTA file.")
    parser.add_argument("--fasta2", help="Read the second sequence from a FASTA file.")
    parser.add_argument(
        '-c', '--config',
        type=str,
        help='Path to a custom configuration file.'
    )
    parser.add_argument("--match", type=int, help="Score for identical symbols.")
    parser.add_argument("--mismatch", type=int, help="Score for different symbols.")
    parser.add_argument("--gap", type=int, help="Score per gap column (negative).")
    parser.add_argument("--matrix", choices=["match_mismatch", "blosum62"],
                        help="Substitution scores to use.")
    parser.add_argument("--fill-order", choices=["row", "column", "wavefront"],
                        help="Order in which the score grid is filled.")
    parser.add_argument("--show-matrices", action="store_true",
                        help="Print the score and traceback grids.")
    parser.add_argument("--column-major", action="store_true",
                        help="Print grids with one line per column.")
    parser.add_argument("--plot", metavar="FILE", help="Save a heatmap of the score grid.")
    parser.add_argument("--width", type=int, default=80, help="Alignment block width (default: %(default)s)")
    parser.add_argument("--log", help="Log file path.")
    parser.add_argument("--log-level", help="Logging level, e.g. DEBUG or 10.")

    args = parser.parse_args(argv)
    if args.fasta1 or args.fasta2:
        if args.seq1 is not None or not (args.fasta1 and args.fasta2):
            parser.error("--fasta1 and --fasta2 are used together, in place of positional sequences")
    elif args.seq1 is None or args.seq2 is None:
        parser.error("two sequences are required")
    return args


def _level(value):
    return int(value) if str(value).isdigit() else str(value).upper()


def main(argv=None):
    """Main entry point for the CLI."""
    args = parse_args(argv)
    try:
        loader = get_config_loader(args.config)
        _, is_using_default_config = loader.get_cli_config()
    except ConfigurationError as e:
        print(f"globalalign: {e}", file=sys.stderr)
        return 2

    logger = setup_logging(
        args.log or loader.get("logging", "log_file"),
        _level(args.log_level or loader.get("logging", "level", "INFO")),
    )
    if is_using_default_config:
        logger.debug("Using default configuration, as no other configuration was provided.")

    try:
        seq1 = read_fasta(args.fasta1) if args.fasta1 else args.seq1
        seq2 = read_fasta(args.fasta2) if args.fasta2 else args.seq2
    except (OSError, ValueError) as e:
        logger.error(f"Cannot read input: {e}")
        return 2

    aligner = PairwiseAligner(
        match_score=args.match,
        mismatch_score=args.mismatch,
        gap_penalty=args.gap,
        substitution_matrix=args.matrix,
        fill_order=args.fill_order,
    )

    try:
        result = aligner.align(seq1, seq2, keep_grids=True)
    except AlignmentError as e:
        logger.error(f"Alignment failed: {e}")
        return 2

    if args.show_matrices:
        print(render_score_grid(result.score_grid, seq1, seq2, column_major=args.column_major))
        print("TRACEBACK MATRIX")
        print(render_traceback_grid(result.traceback_grid, seq1, seq2, column_major=args.column_major))

    result.view(args.width)

    if args.plot:
        fig = plot_score_grid(result.score_grid, seq1, seq2, path=result.path,
                              annotate=result.score_grid.height * result.score_grid.width <= 400)
        fig.savefig(args.plot)
        logger.info(f"Score grid heatmap written to {args.plot}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
