import argparse
import logging
import sys

from hotdog_line.config import ConfigError, RunConfig
from hotdog_line.coordinator import WorkerError, run
from hotdog_line.events import EventLog

logger = logging.getLogger("hotdog_line")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hotdog-line",
                                     description="Run the hot dog making and packing line.")
    parser.add_argument("order", type=int, help="N, total hot dogs to make")
    parser.add_argument("capacity", type=int, help="S, pool (buffer) capacity")
    parser.add_argument("makers", type=int, help="M, number of making machines")
    parser.add_argument("packers", type=int, help="P, number of packing machines (at most 30)")
    parser.add_argument("--log", dest="log_path", default="log.txt", help="trace file to write")
    parser.add_argument("--unit-seconds", type=float, default=0.0,
                        help="seconds per unit of simulated work (default: no delay)")
    parser.add_argument("--plot", metavar="PATH", help="save rate and occupancy diagrams to PATH")
    parser.add_argument("-v", "--verbose", action="store_true", help="log phase transitions")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s - %(levelname)s: %(message)s", datefmt="%H:%M:%S")

    config = RunConfig(args.order, args.capacity, args.makers, args.packers,
                       unit_seconds=args.unit_seconds, log_path=args.log_path,
                       record_history=args.plot is not None)
    try:
        config.validate()
        log = EventLog.open(config.log_path, keep_entries=config.record_history)
    except ConfigError as exc:
        logger.error(f"Invalid parameters: {exc}")
        return 1
    except OSError as exc:
        logger.error(f"Failed to open trace file {config.log_path}: {exc}")
        return 1

    with log:
        try:
            result = run(config, log=log)
        except OSError as exc:
            logger.error(f"Failed to write trace file {config.log_path}: {exc}")
            return 1
        except WorkerError as exc:
            logger.error(f"Run aborted: {exc} ({exc.__cause__!r})")
            return 1

    if args.plot:
        from hotdog_line.plotting import plot_results

        plot_results(result, args.plot)
        logger.info(f"Diagrams saved to {args.plot}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
