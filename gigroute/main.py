"""
gigroute - Main Entry Point

Parse gig job postings, summarize job lists and plan routes from the command
line, or run the background inbox workers.
"""
import sys
import json
import argparse
import logging
from pathlib import Path
from typing import Optional

from gigroute.utils.logger import setup_logger
from gigroute.config.loader import ConfigLoader
from gigroute.models.config import AppConfig
from gigroute.models.route import Coordinate
from gigroute.services.job_parser import JobParser
from gigroute.services.route_optimizer import RouteOptimizer
from gigroute.utils.reward import job_payout
from gigroute.utils.csv_writer import write_route_csv
from gigroute.utils.job_filters import filter_jobs, sort_jobs, SORT_OPTIONS
from gigroute.utils.job_loader import load_jobs_csv
from gigroute.utils.summary_generator import generate_summary, save_summary_csv
from gigroute.workers.worker_manager import WorkerManager
from gigroute.workers.worker_factory import WorkerFactory


def parse_arguments(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description="gigroute - gig job parser and route planner"
    )

    parser.add_argument(
        '--config',
        '-c',
        type=str,
        default='config.yaml',
        help='Path to configuration file (default: config.yaml)'
    )

    parser.add_argument(
        '--log-level',
        '-l',
        type=str,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Override log level from config file'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    parse_cmd = subparsers.add_parser('parse', help='Parse job text into a draft')
    parse_cmd.add_argument('--platform', '-p', help='Platform id or category (e.g. instacart)')
    source = parse_cmd.add_mutually_exclusive_group()
    source.add_argument('--text', '-t', help='Job text')
    source.add_argument('--file', '-f', help='File containing job text')

    optimize_cmd = subparsers.add_parser('optimize', help='Order jobs from a CSV into a route')
    optimize_cmd.add_argument('--jobs', '-j', required=True, help='CSV file of jobs')
    optimize_cmd.add_argument('--platform', '-p', default='all', help='Only route jobs from this platform')
    optimize_cmd.add_argument('--start-lat', type=float, help='Starting latitude')
    optimize_cmd.add_argument('--start-lng', type=float, help='Starting longitude')
    optimize_cmd.add_argument('--output', '-o', help='Write the route to this CSV file')

    list_cmd = subparsers.add_parser('list', help='Filter and sort jobs from a CSV')
    list_cmd.add_argument('--jobs', '-j', required=True, help='CSV file of jobs')
    list_cmd.add_argument('--platform', '-p', default='all', help='Platform filter')
    list_cmd.add_argument('--sort', '-s', default='roi', choices=SORT_OPTIONS, help='Sort order')
    list_cmd.add_argument('--near-lat', type=float, help='Latitude for proximity sort')
    list_cmd.add_argument('--near-lng', type=float, help='Longitude for proximity sort')

    summary_cmd = subparsers.add_parser('summary', help='Earnings summary of jobs from a CSV')
    summary_cmd.add_argument('--jobs', '-j', required=True, help='CSV file of jobs')
    summary_cmd.add_argument('--output', '-o', help='Write the platform breakdown to this CSV file')

    watch_cmd = subparsers.add_parser('watch', help='Run the inbox workers from the configuration file')
    watch_cmd.add_argument('--once', action='store_true', help='Run one cycle of each worker and exit')

    return parser.parse_args(argv)


def _coordinate(lat: Optional[float], lng: Optional[float]) -> Optional[Coordinate]:
    if lat is None or lng is None:
        return None
    return Coordinate(lat=lat, lng=lng)


def run_parse(args) -> int:
    if args.text is not None:
        text = args.text
    elif args.file:
        text = Path(args.file).read_text(encoding='utf-8', errors='replace')
    else:
        text = sys.stdin.read()

    draft = JobParser().parse_text(text, args.platform)
    print(json.dumps(draft.to_dict(), indent=2, ensure_ascii=False))
    return 0


def run_optimize(args, config: AppConfig, logger: logging.Logger) -> int:
    jobs = filter_jobs(load_jobs_csv(args.jobs), platform=args.platform)

    optimizer = RouteOptimizer(
        average_speed_kmh=config.optimizer.average_speed_kmh,
        fallback_location=Coordinate(
            lat=config.optimizer.fallback_latitude,
            lng=config.optimizer.fallback_longitude
        )
    )

    route = optimizer.optimize_route(jobs, _coordinate(args.start_lat, args.start_lng))
    metrics = optimizer.calculate_route_metrics(jobs)

    print(f"Route over {len(route.steps)} jobs")
    for step in route.steps:
        print(
            f"  {step.order:2d}. {step.estimated_arrival:%H:%M}  {step.job.title[:40]:40s} "
            f"${job_payout(step.job):7.2f}  +{step.distance_from_previous:5.2f} km "
            f"/ {step.duration_from_previous:4.1f} min"
        )
    print(
        f"Total: ${route.total_earnings:.2f} | {route.total_distance:.2f} km | "
        f"{route.total_duration:.0f} min | done by {route.estimated_completion_time:%H:%M}"
    )
    print(
        f"Average ROI: {metrics.average_roi:.2f} | "
        f"Estimated hourly rate: ${metrics.estimated_hourly_rate:.2f}/h"
    )

    if args.output and not write_route_csv(route, args.output, logger):
        return 1
    return 0


def run_list(args) -> int:
    jobs = filter_jobs(load_jobs_csv(args.jobs), platform=args.platform)
    jobs = sort_jobs(jobs, args.sort, _coordinate(args.near_lat, args.near_lng))

    for job in jobs:
        print(f"  {job.id or '-':>6}  {job.platform:14s} {job.title[:48]:48s} ${job_payout(job):7.2f}")
    print(f"{len(jobs)} job(s)")
    return 0


def run_summary(args, logger: logging.Logger) -> int:
    summary = generate_summary(load_jobs_csv(args.jobs))

    print(
        f"{summary.total_jobs} jobs | {summary.completed_jobs} completed | "
        f"{summary.pending_jobs} pending | payout ${summary.total_payout:.2f} | "
        f"tips ${summary.total_tips:.2f}"
    )
    for platform in summary.platforms:
        print(
            f"  {platform.name:14s} {platform.count:4d} ({platform.percentage:5.1f}%) "
            f"${platform.earnings:8.2f}  ${platform.average_hourly_rate:.2f}/h"
        )

    if args.output and not save_summary_csv(summary, args.output, logger):
        return 1
    return 0


def run_watch(args, config: AppConfig, logger: logging.Logger) -> int:
    factory = WorkerFactory(app_config=config)

    enabled_configs = config.get_enabled_workers()
    logger.info(f"Creating {len(enabled_configs)} enabled workers...")

    workers = factory.create_workers_from_configs(enabled_configs)

    if not workers:
        logger.warning("No workers were created. Check your configuration.")
        return 0

    if args.once:
        manager = WorkerManager(install_signal_handlers=False)
        manager.register_workers(workers)
        return 1 if manager.run_once() else 0

    manager = WorkerManager()
    manager.register_workers(workers)
    manager.run()
    return 0


def main(argv=None) -> int:
    """Main entry point for gigroute"""
    args = parse_arguments(argv)

    logger = setup_logger("gigroute", args.log_level or "INFO")

    try:
        loader = ConfigLoader(args.config)
        # Only the workers need a configuration file
        config = loader.load() if args.command == 'watch' else loader.load_or_default()

        log_level = args.log_level or config.log_level
        setup_logger("gigroute", log_level)
        logger.debug(f"Log level set to: {log_level}")

        if args.command == 'parse':
            return run_parse(args)
        if args.command == 'optimize':
            return run_optimize(args, config, logger)
        if args.command == 'list':
            return run_list(args)
        if args.command == 'summary':
            return run_summary(args, logger)
        if args.command == 'watch':
            return run_watch(args, config, logger)

    except FileNotFoundError as e:
        logger.error(str(e))
        if args.command == 'watch':
            logger.error("See config.example.yaml for reference.")
        return 1

    except Exception as e:
        logger.error(f"Application error: {e}", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
