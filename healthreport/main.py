"""
Workstation Health Report - Main Entry Point.

Collects a health snapshot of the local machine, renders it as HTML and
writes it to disk in a single pass.
"""

import argparse
import logging
import logging.handlers
import socket
import sys
from datetime import datetime
from pathlib import Path

from .core.config import Config, ConfigError, LoggingConfig, get_default_config_path
from .collectors.health_collector import HealthCollector
from .report.renderer import ReportRenderer
from .report.writer import ReportWriter


logger = logging.getLogger(__name__)


def setup_logging(config: LoggingConfig, verbose: bool = False):
    """Configure console logging and the optional rotating log file."""
    level = logging.DEBUG if verbose else getattr(logging, config.level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=config.format)

    if config.file_path:
        handler = logging.handlers.RotatingFileHandler(
            config.file_path,
            maxBytes=config.max_file_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(config.format))
        logging.getLogger().addHandler(handler)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Generate an HTML health report for this workstation"
    )

    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to configuration file (YAML)"
    )

    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Report file to write (default: SystemHealthReport.html)"
    )

    parser.add_argument(
        "--json",
        dest="json_path",
        default=None,
        help="Also write the raw snapshot as JSON to this path"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    parser.add_argument(
        "--generate-config",
        action="store_true",
        help="Generate a sample configuration file"
    )

    return parser.parse_args(argv)


def generate_report(config: Config, hostname: str, timestamp: datetime) -> bool:
    """Run one collect -> render -> write cycle. Returns False if the write failed."""
    collector = HealthCollector(config, hostname=hostname)
    snapshot = collector.collect_all(timestamp)

    html = ReportRenderer(title=config.report.title).render(snapshot)

    writer = ReportWriter(config.report.output_path)
    if not writer.write(html):
        return False

    print(f"Report saved to {writer.output_path}")

    if config.report.json_path:
        writer.write_json(snapshot, config.report.json_path)

    return True


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Generate sample config if requested
    if args.generate_config:
        config = Config()
        config_path = "config/config.yaml"
        Path("config").mkdir(exist_ok=True)
        config.to_yaml(config_path)
        print(f"Generated sample configuration: {config_path}")
        return 0

    # Load configuration
    config_path = args.config or get_default_config_path()
    try:
        config = Config.from_yaml(config_path)
    except (ConfigError, OSError) as e:
        setup_logging(LoggingConfig(), verbose=args.verbose)
        logger.error(f"Could not load configuration: {e}")
        return 2

    # Apply command line overrides
    if args.output:
        config.report.output_path = args.output
    if args.json_path:
        config.report.json_path = args.json_path

    setup_logging(config.logging, verbose=args.verbose)
    logger.debug(f"Configuration loaded from {config_path}")

    ok = generate_report(config, hostname=socket.gethostname(), timestamp=datetime.now())
    return 0 if ok else 1


def run():
    """Entry point for the application."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nInterrupted")
        sys.exit(130)


if __name__ == "__main__":
    run()
