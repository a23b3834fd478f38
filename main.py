#!/usr/bin/env python3
"""
Report CPU and block device I/O statistics from /proc/stat and /proc/diskstats, iostat style.
First report shows counters since boot (unless -y); each following report covers one interval.
Partitions are not reported, only whole disks.
"""
import argparse
import logging
import math

from iostat.config import KB_DIVISOR, MB_DIVISOR, PROC_ROOT, ReportOptions
from iostat.provider import ProcSnapshotProvider
from iostat.runner import ReportCycle

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="iostat",
        description="Report CPU and block device I/O statistics",
    )
    p.add_argument("-x", "--extended", action="store_true", help="Show extended device statistics")
    p.add_argument("-c", "--cpu", action="store_true", help="Show CPU statistics")
    p.add_argument("-d", "--device", action="store_true", help="Show device statistics (default: both CPU and device)")
    p.add_argument("-k", "--kilobytes", action="store_true", help="Display throughput in kilobytes per second (default)")
    p.add_argument("-m", "--megabytes", action="store_true", help="Display throughput in megabytes per second (wins over -k)")
    p.add_argument("-y", "--omit-first", action="store_true", help="Omit the first report with statistics since boot")
    p.add_argument("--proc-root", default=PROC_ROOT, help=f"procfs to read counters from (default: {PROC_ROOT})")
    p.add_argument("--debug", action="store_true", help="Debug logging and a summary of counter sources")
    p.add_argument("interval", nargs="?", type=float, default=1.0, help="Seconds between reports (default: 1)")
    p.add_argument("count", nargs="?", type=int, default=0, help="Number of reports (default: 0 = until interrupted)")
    return p


def options_from_args(args: argparse.Namespace) -> ReportOptions:
    """Neither -c nor -d means both sections."""
    neither = not args.cpu and not args.device
    return ReportOptions(
        extended=args.extended,
        show_cpu=args.cpu or neither,
        show_device=args.device or neither,
        unit_divisor=MB_DIVISOR if args.megabytes else KB_DIVISOR,
        omit_first=args.omit_first,
        interval=args.interval,
        count=args.count,
    )


def main(argv: list[str] | None = None) -> None:
    p = build_parser()
    args = p.parse_args(argv)

    if not (math.isfinite(args.interval) and args.interval > 0):
        p.error("interval must be a finite number > 0")
    if args.count < 0:
        p.error("count must be >= 0")

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    options = options_from_args(args)
    provider = ProcSnapshotProvider(args.proc_root)
    if args.debug:
        for line in provider.describe_sources():
            logger.debug("Counter source: %s", line)
        logger.debug(
            "Interval %.2fs, count %s, extended=%s, unit=%s",
            options.interval, options.count or "unbounded", options.extended, options.unit_label,
        )

    try:
        n = ReportCycle(provider, options).run()
    except OSError as e:
        raise SystemExit(f"iostat: cannot read counters: {e}") from e
    except KeyboardInterrupt:
        raise SystemExit(130)
    logger.debug("Emitted %d reports", n)


if __name__ == "__main__":
    main()
