"""Command-line interface for the open-dora service."""

import sys
from datetime import timezone
from typing import Optional

import click
import pandas as pd
from dateutil import parser as date_parser

from .config import DatabaseConfig
from .logging import get_logger, setup_logging
from .models import Aggregation, Response, ServiceParameters, TypeQuery
from .services import get_service
from .sql_client import SQLClient

logger = get_logger(__name__)

VALUE_COLUMNS = {
    TypeQuery.DF_COUNT: "Deployments",
    TypeQuery.DF_AVERAGE: "Average Deployments",
    TypeQuery.DF_TOTAL: "Total Deployments",
}


class CLIContext:
    """Shared context for CLI commands."""

    def __init__(self, database_url: Optional[str]):
        config = DatabaseConfig.from_env()
        if database_url:
            config.database_url = database_url
        self.config = config
        self._client = None

    @property
    def client(self) -> SQLClient:
        """SQL client, created on first use."""
        if self._client is None:
            self._client = SQLClient(self.config.url)
        return self._client


@click.group()
@click.option(
    '--database-url',
    help='SQLAlchemy URL of the DevLake database',
    envvar='DEVLAKE_DATABASE_URL'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], case_sensitive=False),
    default='WARNING',
    envvar='OPEN_DORA_LOG_LEVEL',
    help='Logging level'
)
@click.pass_context
def cli(ctx, database_url: Optional[str], log_level: str):
    """Deployment frequency metrics from an Apache DevLake database."""
    setup_logging(level=log_level)
    ctx.obj = CLIContext(database_url)


@cli.command()
@click.option('--type', 'type_query', required=True, type=click.Choice([t.value for t in TypeQuery]), help='Metric to compute')
@click.option('--aggregation', type=click.Choice([a.value for a in Aggregation]), default='weekly', help='Time bucket granularity')
@click.option('--project', help='DevLake project name (all projects when omitted)')
@click.option('--from', 'since', help='Start date (YYYY-MM-DD) or unix timestamp')
@click.option('--to', 'until', help='End date (YYYY-MM-DD) or unix timestamp')
@click.option('--output-format', type=click.Choice(['json', 'table']), default='table')
@click.pass_context
def metric(ctx, type_query: str, aggregation: str, project: Optional[str], since: Optional[str], until: Optional[str], output_format: str):
    """Query a deployment frequency series."""
    try:
        params = ServiceParameters.from_dict({
            'type': type_query,
            'aggregation': aggregation,
            'project': project,
            'from': _to_timestamp(since),
            'to': _to_timestamp(until),
        })
        logger.debug(f"Request parameters: {params.to_dict()}")

        service = get_service(params.type_query, ctx.obj.client)
        response = service.serve_request(params)

        if output_format == 'json':
            click.echo(response.to_json())
        else:
            _echo_table(params, response)

    except Exception as e:
        click.echo(f"✗ Error querying deployment frequency: {e}", err=True)
        sys.exit(1)


def _to_timestamp(value: Optional[str]) -> int:
    """Convert a date string or unix timestamp to unix seconds (0 when absent)."""
    if not value:
        return 0
    if value.isdigit():
        return int(value)
    parsed = date_parser.parse(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())


def _echo_table(params: ServiceParameters, response: Response) -> None:
    """Render a response as a table."""
    if not response.data_points:
        click.echo("No data points to display for the specified period")
        return

    df = pd.DataFrame(
        [{'Period': p.key, VALUE_COLUMNS[params.type_query]: p.value} for p in response.data_points]
    )
    click.echo(f"\nDeployment Frequency ({params.type_query.value}, {response.aggregation.value})")
    click.echo("=" * 60)
    click.echo(df.to_string(index=False))


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
