"""
CLI entry point for evaluating elementwise tensor operations.

Usage with config file (any number of [[operations]] entries):
    python main.py -c configuration.toml

Usage with command-line args (single operation):
    python main.py --op add --left "[1, 2, 3, 4]" --right "[10, 20, 30, 40]"
    python main.py --op div --left "[[1, 2], [3, 4]]" --right "[[1, 1], [2, 2]]" --dtype float64
"""
import argparse
import json
import logging
import sys

from sftensor.domain.entities.errors import TensorError
from sftensor.domain.use_cases.evaluate_operation import EvaluateOperation, OperationResult
from sftensor.infrastructure.configuration import (
    OPERATION_NAMES,
    EvaluationConfiguration,
    OperationConfiguration,
    TensorConfiguration,
)
from sftensor.infrastructure.logging import setup_logging
from sftensor.infrastructure.sinks import ConsoleSink

logger = logging.getLogger(__name__)


def operand(text: str):
    """Decode an operand given on the command line as a JSON number or (nested) list."""
    return json.loads(text)


def parse_args(argv=None):
    """
    Parse command-line arguments.

    Parameters
    ----------
    argv : list[str] | None
        Command-line arguments. If None, uses sys.argv.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        description="Evaluate elementwise tensor operations and print the results."
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Path to TOML configuration file (if provided, operation args are ignored)",
    )
    parser.add_argument(
        "--op",
        choices=OPERATION_NAMES,
        help="Elementwise operation to apply",
    )
    parser.add_argument(
        "--left",
        type=operand,
        help="Left operand as a JSON number or (nested) list, e.g. '[[1, 2], [3, 4]]'",
    )
    parser.add_argument(
        "--right",
        type=operand,
        help="Right operand as a JSON number or (nested) list",
    )
    parser.add_argument(
        "--dtype",
        default=None,
        help="NumPy dtype of the operands (default: inferred from the values)",
    )
    parser.add_argument(
        "--no-bounds-check",
        dest="bounds_check",
        action="store_false",
        help="Disable index and slice bounds validation",
    )
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Also print the raw buffer of each result",
    )
    parser.add_argument(
        "--properties",
        action="store_true",
        help="Also print the properties (rank, shape, stride, offset) of each result",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: INFO, or log_level from the config file)",
    )
    args = parser.parse_args(argv)
    if not args.config and not (args.op and args.left is not None and args.right is not None):
        parser.error("either --config or all of --op, --left and --right are required")
    return args


def build_configuration(args) -> EvaluationConfiguration:
    """
    Build the evaluation configuration from a config file or from the arguments.

    Raises
    ------
    ValueError
        If neither --config nor all of --op, --left and --right are given.
    """
    if args.config:
        return EvaluationConfiguration.load(args.config)

    if not (args.op and args.left is not None and args.right is not None):
        raise ValueError("Either --config or all of --op, --left and --right are required")

    operation = OperationConfiguration(
        name=args.op,
        op=args.op,
        left=args.left,
        right=args.right,
        show_raw=args.raw,
        show_properties=args.properties,
    )
    return EvaluationConfiguration(
        tensor=TensorConfiguration(dtype=args.dtype, bounds_check=args.bounds_check),
        operations=[operation],
    )


def evaluate_all(config: EvaluationConfiguration, sink) -> list[OperationResult]:
    """
    Evaluate every configured operation in order.

    Parameters
    ----------
    config : EvaluationConfiguration
        Tensor settings and operations to evaluate.
    sink : TensorSink
        Destination of the rendered results.

    Returns
    -------
    list[OperationResult]
        One result per operation.
    """
    total = len(config.operations)
    logger.info(f"Evaluating {total} operations")

    results = []
    for i, operation in enumerate(config.operations, start=1):
        logger.info(f"[{i}/{total}] {operation.name}")
        use_case = EvaluateOperation(
            name=operation.name,
            op=operation.op,
            left=operation.left,
            right=operation.right,
            sink=sink,
            dtype=config.tensor.dtype,
            bounds_check=config.tensor.bounds_check,
            show_raw=operation.show_raw,
            show_properties=operation.show_properties,
        )
        results.append(use_case.run())

    logger.info(f"Evaluation completed: {total} operations")
    return results


def main(argv=None) -> int:
    """
    Main entry point.

    Parameters
    ----------
    argv : list[str] | None
        Command-line arguments. If None, uses sys.argv.

    Returns
    -------
    int
        0 on success, 1 if an operation failed with a tensor error.
    """
    args = parse_args(argv)
    config = build_configuration(args)
    setup_logging(args.log_level or config.log_level)

    try:
        evaluate_all(config, ConsoleSink())
    except TensorError as error:
        logger.error(f"Evaluation aborted: {error}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
