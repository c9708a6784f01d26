"""Entry point for the virtual memory translation simulator.

Usage:
    python run.py --frame-bits 8 --frames 128      # translate addresses.txt
    python run.py                                   # prompts for the sizes
    python run.py -v ...                            # trace every translation
"""
import argparse
import logging
import sys

from vmsim.core.config import (
    DEFAULT_ADDRESSES,
    DEFAULT_BACKING_STORE,
    DEFAULT_STATS,
    SimulationConfig,
)
from vmsim.core.errors import ConfigurationError, VMSimError
from vmsim.simulation import Simulation


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Virtual memory address translation simulator")
    parser.add_argument("--frame-bits", type=int, default=None,
                        help="log2 of the frame size in bytes (prompted for if omitted)")
    parser.add_argument("--frames", type=int, default=None,
                        help="number of frames in physical memory (prompted for if omitted)")
    parser.add_argument("-b", "--backing-store", default=DEFAULT_BACKING_STORE,
                        help="backing store file (default: %(default)s)")
    parser.add_argument("-a", "--addresses", default=DEFAULT_ADDRESSES,
                        help="file of logical addresses (default: %(default)s)")
    parser.add_argument("-s", "--stats", default=DEFAULT_STATS,
                        help="statistics report path (default: %(default)s)")
    parser.add_argument("--chart-json", default=None, help="also export rate history as JSON")
    parser.add_argument("--chart-pdf", default=None, help="also plot rate history to a PDF")
    parser.add_argument("--csv", default=None, help="also export counters as CSV")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log every translation")
    return parser.parse_args(argv)


def prompt_config(args, read=input) -> SimulationConfig:
    """Ask for the sizes until they describe a valid physical memory."""
    while True:
        try:
            frame_bits = int(read("Please enter the frame size: "))
            total_frames = int(read("Please enter the total frames number in physical memory: "))
        except ValueError:
            print("Warning: please enter whole numbers.")
            continue
        config = SimulationConfig.from_args(args, frame_bits=frame_bits, total_frames=total_frames)
        try:
            return config.validate()
        except ConfigurationError as e:
            print(f"Warning: {e}.")


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.frame_bits is None or args.frames is None:
            config = prompt_config(args)
        else:
            config = SimulationConfig.from_args(args).validate()

        with Simulation(config) as sim:
            sim.run_simulation()
            sim.write_outputs(chart_json=args.chart_json, chart_pdf=args.chart_pdf, csv_path=args.csv)
    except (VMSimError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(f"\nFinished writing to {config.stats_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
