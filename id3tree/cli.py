"""
Command-line interface: train a tree from a CSV file and classify rows.

Examples:
  # Train on a CSV file and save the model
  python -m id3tree train crops.csv --output crop_model.json --print-tree

  # Classify two rows with a saved model
  python -m id3tree classify crop_model.json "Sunny,Hot,High,Weak" "Rain,Mild,High,Strong"
"""

import argparse
import sys

from . import exchange
from .dataset import Dataset
from .errors import (
    MalformedRowError,
    ModelFormatError,
    UnopenableSourceError,
    UnrecognizedCategoryError,
)
from .id3 import DEFAULT_MAJORITY_THRESHOLD, ID3
from .logging import get_logger, setup_logging

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_UNRECOGNIZED = 2


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="id3tree",
        description="ID3 decision tree training and classification",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("\n\n", 1)[1],
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    train = commands.add_parser("train", help="Train a tree from a CSV file")
    train.add_argument("csv", help="Training data; header row first, label last")
    train.add_argument(
        "-o", "--output",
        default="model.json",
        help="Where to write the model (default: model.json)",
    )
    train.add_argument(
        "--threshold",
        type=float,
        default=DEFAULT_MAJORITY_THRESHOLD,
        help="Majority share above which a node is pruned (default: 0.8)",
    )
    train.add_argument(
        "--indent",
        type=int,
        default=4,
        help="JSON indentation of the model file (default: 4)",
    )
    train.add_argument(
        "--sep",
        default=",",
        help="CSV field delimiter (default: ',')",
    )
    train.add_argument(
        "--print-tree",
        action="store_true",
        help="Print one rule per leaf after training",
    )
    train.add_argument("--dot", help="Also write the tree as Graphviz DOT source")

    classify = commands.add_parser("classify", help="Classify rows with a saved model")
    classify.add_argument("model", help="Model file written by 'train'")
    classify.add_argument(
        "rows",
        nargs="+",
        help="Rows to classify, fields separated by --sep",
    )
    classify.add_argument(
        "--sep",
        default=",",
        help="Field delimiter within a row (default: ',')",
    )

    return parser.parse_args(argv)


def run_train(args):
    dataset = Dataset.from_csv(args.csv, sep=args.sep)
    try:
        model = ID3(majority_threshold=args.threshold).fit(dataset)
    except ValueError as e:
        # bad threshold or a CSV with a header but no data rows
        logger.error("%s", e)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    exchange.dump(model.tree, args.output, indent=args.indent)

    if args.print_tree:
        model.print_tree()
    if args.dot:
        with open(args.dot, "w", encoding="utf-8") as f:
            f.write(model.tree.to_dot(dataset.attribute_names))
            f.write("\n")
        logger.info("Wrote DOT source to %s", args.dot)

    print(f"Trained {len(model.tree)} nodes from {len(dataset)} rows; model saved to {args.output}")
    return EXIT_OK


def run_classify(args):
    tree = exchange.load(args.model)
    status = EXIT_OK
    for text in args.rows:
        row = text.split(args.sep)
        try:
            print(tree.classify(row))
        except (UnrecognizedCategoryError, MalformedRowError) as e:
            print(f"{text}: {e}", file=sys.stderr)
            status = EXIT_UNRECOGNIZED
    return status


def main(argv=None):
    """Entry point for the id3tree command."""
    args = parse_args(argv)
    setup_logging(args.log_level)

    handlers = {"train": run_train, "classify": run_classify}
    try:
        return handlers[args.command](args)
    except (UnopenableSourceError, MalformedRowError, ModelFormatError) as e:
        logger.error("%s", e)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_FAILURE
