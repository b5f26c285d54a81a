"""
Main CLI interface for usage cost monitoring.

Provides command-line access to the hourly and daily cost breakdowns of a
usage export, single-bucket drill-downs and the interactive dashboard.
"""

import json
import logging
import sys
from datetime import datetime

import click

from .config.settings import get_config, load_config_file
from .exceptions import UsageMonitorError
from .ingest.csv_loader import load_usage_csv
from .stats.aggregator import process_stats, unique_categories
from .stats.detail import bucket_detail
from .stats.export import format_currency, summaries_to_dataframe
from .stats.models import ReferenceZone, TimeRange
from .stats.window import current_time, to_reference_time

# Set up logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

RANGE_CHOICES = [time_range.value for time_range in TimeRange]
ZONE_CHOICES = [zone.value for zone in ReferenceZone]


def setup_logging(verbose: bool = False):
    """Configure logging based on verbosity settings."""
    # Default is quiet (only show results)
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    else:
        logging.getLogger().setLevel(logging.ERROR)

    # Reduce noise from the web server stack
    for logger_name in ["werkzeug", "urllib3"]:
        logging.getLogger(logger_name).setLevel(logging.INFO if verbose else logging.ERROR)


def parse_now(value: str | None, zone: ReferenceZone) -> datetime:
    """Parse the --now option, defaulting to the current time in the reference zone."""
    if not value:
        return current_time(zone)
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise click.BadParameter(f"'{value}' is not an ISO-8601 timestamp", param_hint="--now") from e
    return to_reference_time(parsed, zone)


def _resolve_options(config, time_range, timezone):
    """Fill range and timezone from configuration when not given."""
    time_range = TimeRange(time_range) if time_range else config.default_range
    zone = ReferenceZone(timezone) if timezone else config.reference_zone
    return time_range, zone


@click.group()
@click.option("--config", "-c", help="Path to configuration file")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging and debug output")
@click.pass_context
def cli(ctx, config, verbose):
    """Usage Cost Monitor - Hourly and daily cost breakdowns of usage exports."""
    setup_logging(verbose)

    ctx.ensure_object(dict)
    ctx.obj["config_file"] = config
    ctx.obj["verbose"] = verbose

    try:
        ctx.obj["config"] = load_config_file(config) if config else get_config()
    except Exception as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(1)


def _display_stats_table(summaries, time_range, skip_empty):
    """Print the bucket table followed by the window total."""
    total_cost = sum(summary.total_cost for summary in summaries)
    shown = [summary for summary in summaries if summary.total_cost > 0] if skip_empty else summaries

    click.echo(f"\nCost per {time_range.granularity.value} ({time_range.label})")
    click.echo("=" * 50)

    if shown:
        frame = summaries_to_dataframe(shown)
        formatters = {column: format_currency for column in frame.columns[1:]}
        click.echo(frame.to_string(index=False, formatters=formatters))
    else:
        click.echo("No usage in this range.")

    click.echo("-" * 50)
    click.echo(f"Total Cost: {format_currency(total_cost, digits=2)}")


def _stats_json(summaries, time_range, now):
    return {
        "range": time_range.value,
        "granularity": time_range.granularity.value,
        "now": now.isoformat(),
        "categories": unique_categories(summaries),
        "total_cost": round(sum(summary.total_cost for summary in summaries), 4),
        "summaries": [summary.to_dict() for summary in summaries],
    }


@cli.command()
@click.argument("file", type=click.Path(dir_okay=False))
@click.option(
    "--range",
    "time_range",
    type=click.Choice(RANGE_CHOICES),
    help="Trailing window: 1d (hourly), 7d or 30d (daily)",
)
@click.option("--now", "now_value", help="Reference instant as ISO-8601 (default: current time)")
@click.option("--timezone", type=click.Choice(ZONE_CHOICES), help="Reference timezone")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json", "csv"]),
    default="table",
    help="Output format",
)
@click.option("--skip-empty", is_flag=True, help="Hide zero-cost buckets in table output")
@click.pass_context
def stats(ctx, file, time_range, now_value, timezone, output_format, skip_empty):
    """Show cost per bucket for a usage export."""
    config = ctx.obj["config"]
    time_range, zone = _resolve_options(config, time_range, timezone)
    now = parse_now(now_value, zone)

    try:
        records = load_usage_csv(file, zone=zone)
        summaries = process_stats(records, time_range, now=now, zone=zone)
    except UsageMonitorError as e:
        logger.error(f"Stats failed: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if output_format == "json":
        click.echo(json.dumps(_stats_json(summaries, time_range, now), indent=2))
    elif output_format == "csv":
        click.echo(summaries_to_dataframe(summaries).to_csv(index=False), nl=False)
    else:
        _display_stats_table(summaries, time_range, skip_empty)


def _display_detail_table(detail):
    """Print a bucket drill-down."""
    click.echo(f"\nBucket {detail.bucket}")
    click.echo("=" * 50)
    click.echo(f"Total Requests: {detail.total_requests}")
    click.echo(f"Total Cost: {format_currency(detail.total_cost)}")
    click.echo(f"Average Cost per Request: {format_currency(detail.average_cost)}")

    if detail.by_category:
        click.echo("\nBy Category:")
        for category, item in detail.by_category.items():
            click.echo(f"  {category}: {item.count} requests, {format_currency(item.cost)}")


@cli.command()
@click.argument("file", type=click.Path(dir_okay=False))
@click.argument("bucket")
@click.option(
    "--range",
    "time_range",
    type=click.Choice(RANGE_CHOICES),
    help="Range the bucket belongs to; 1d means hourly keys (YYYY-MM-DDTHH)",
)
@click.option("--now", "now_value", help="Reference instant as ISO-8601 (default: current time)")
@click.option("--timezone", type=click.Choice(ZONE_CHOICES), help="Reference timezone")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@click.pass_context
def detail(ctx, file, bucket, time_range, now_value, timezone, output_format):
    """Show requests and cost per category for a single bucket."""
    config = ctx.obj["config"]
    time_range, zone = _resolve_options(config, time_range, timezone)
    now = parse_now(now_value, zone)

    try:
        records = load_usage_csv(file, zone=zone)
        result = bucket_detail(records, bucket, time_range.granularity, now=now, zone=zone)
    except UsageMonitorError as e:
        logger.error(f"Detail failed: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if output_format == "json":
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _display_detail_table(result)


@cli.command()
@click.option("--file", "usage_file", type=click.Path(dir_okay=False), help="Usage export to preload")
@click.option("--host", help="Dashboard host (default: from configuration)")
@click.option("--port", type=int, help="Dashboard port (default: from configuration)")
@click.option("--debug/--no-debug", default=None, help="Enable debug mode")
@click.pass_context
def dashboard(ctx, usage_file, host, port, debug):
    """Start the interactive web dashboard."""
    from .visualization.dashboard.core import UsageMonitorDashboard

    config = ctx.obj["config"]
    config.override_from_cli(
        {
            "usage_file": usage_file,
            "dashboard_host": host,
            "dashboard_port": port,
            "dashboard_debug": debug,
        }
    )

    try:
        dashboard_app = UsageMonitorDashboard(config)
        click.echo(f"Starting dashboard at http://{dashboard_app.host}:{dashboard_app.port}")
        dashboard_app.run()
    except KeyboardInterrupt:
        click.echo("Dashboard stopped")
    except Exception as e:
        click.echo(f"Dashboard failed: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.pass_context
def config_info(ctx):
    """Display current configuration information."""
    config = ctx.obj["config"]

    click.echo("Usage Cost Monitor Configuration")
    click.echo("=" * 40)

    click.echo(f"Default Range: {config.default_range.value} ({config.default_range.label})")
    click.echo(f"Timezone: {config.reference_zone.value}")
    click.echo(f"Usage File: {config.usage_file or 'Not set'}")

    dashboard_config = config.dashboard
    click.echo("\nDashboard:")
    click.echo(f"  Host: {dashboard_config.get('host', '127.0.0.1')}")
    click.echo(f"  Port: {dashboard_config.get('port', 8050)}")
    click.echo(f"  Debug: {dashboard_config.get('debug', False)}")


@cli.command()
def version():
    """Display version information."""
    from . import __version__

    click.echo(f"Usage Cost Monitor v{__version__}")
    click.echo("Hourly and daily cost breakdowns of usage exports")


if __name__ == "__main__":
    cli()
