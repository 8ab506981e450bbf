"""
Command-line interface for the Hacker News leaderboard
"""

import asyncio
import click
from prettytable import PrettyTable
from .config import (
    DEFAULT_STORY_LIMIT,
    TOP_COMMENTERS_COUNT,
    MAX_NUMBER_OF_RETRIES,
    RETRY_DELAY,
    SLOW_WARNING_AFTER,
    STORIES_TABLE_HEADER,
    COMMENTERS_TABLE_HEADER,
    FATAL_MESSAGE,
    RETRY_MESSAGE,
    SLOW_MESSAGE,
)
from .models import RetryPolicy
from .leaderboard import collect_report
from .logging_config import setup_logging, get_logger


def _generate_table(head, rows) -> str:
    """Render rows as a console table."""
    table = PrettyTable(head)
    table.align = "l"
    table.add_rows(rows)
    return table.get_string()


def _write_banner(text, output_file, leading_newline=False):
    rule = "=" * len(text)
    click.echo(("\n" if leading_newline else "") + rule, file=output_file)
    click.echo(text, file=output_file)
    click.echo(rule, file=output_file)


def _write_report(report, output_file):
    """Write the stories table followed by the commenters table."""
    _write_banner("List of the top stories on hacker news right now.", output_file, leading_newline=True)
    click.echo(
        _generate_table(STORIES_TABLE_HEADER, [[story.title, story.score] for story in report.stories]),
        file=output_file,
    )

    _write_banner(
        "List of all top commenters and their total comments across the top stories above.",
        output_file,
    )
    click.echo(
        _generate_table(COMMENTERS_TABLE_HEADER, [[entry.author, entry.count] for entry in report.top_commenters]),
        file=output_file,
    )


def _echo_retry(attempt, max_retries, delay, error):
    click.echo(RETRY_MESSAGE.format(delay=delay, attempt=attempt, max_retries=max_retries), err=True)


def _echo_slow():
    click.echo(SLOW_MESSAGE, err=True)


@click.command()
@click.option(
    "--count",
    "-c",
    default=DEFAULT_STORY_LIMIT,
    help=f"Number of top stories to rank (default: {DEFAULT_STORY_LIMIT})",
    type=click.IntRange(1, 500),
)
@click.option(
    "--top",
    "-t",
    default=TOP_COMMENTERS_COUNT,
    help=f"Number of commenters to list (default: {TOP_COMMENTERS_COUNT})",
    type=click.IntRange(1, 100),
)
@click.option(
    "--retries",
    default=MAX_NUMBER_OF_RETRIES,
    help=f"Full re-runs allowed after a network failure (default: {MAX_NUMBER_OF_RETRIES})",
    type=click.IntRange(min=0),
)
@click.option(
    "--retry-delay",
    default=RETRY_DELAY,
    help=f"Seconds to wait before a re-run (default: {RETRY_DELAY})",
    type=click.FloatRange(min=0),
)
@click.option(
    "--slow-warning",
    default=SLOW_WARNING_AFTER,
    help=f"Seconds before warning that the API is slow (default: {SLOW_WARNING_AFTER})",
    type=click.FloatRange(min=0),
)
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default=None,
    help="Output file (default: stdout)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="WARNING",
    help="Set logging level (default: WARNING)",
)
@click.option(
    "--log-file",
    type=click.Path(),
    default=None,
    help="Log to file instead of stderr",
)
def main(count: int, top: int, retries: int, retry_delay: float, slow_warning: float,
         output, log_level: str, log_file: str):
    """Rank the top Hacker News stories and their most active commenters"""
    setup_logging(level=log_level, log_file=log_file)
    logger = get_logger(__name__)

    logger.info(f"Starting HN Leaderboard - stories: {count}, commenters: {top}, retries: {retries}")
    policy = RetryPolicy(max_retries=retries, retry_delay=retry_delay, slow_warning_after=slow_warning)

    click.echo("Getting stories...", err=True)
    try:
        report = asyncio.run(
            collect_report(
                story_limit=count,
                commenter_limit=top,
                policy=policy,
                on_retry=_echo_retry,
                on_slow=_echo_slow,
            )
        )
    except Exception as e:
        logger.error(f"Aggregation failed: {e}", exc_info=True)
        click.echo(FATAL_MESSAGE, err=True)
        click.echo(repr(e), err=True)
        raise click.Abort()

    logger.info(f"Ranked {len(report.stories)} stories over {report.comment_count} comments")

    if output is None:
        _write_report(report, None)
    else:
        with open(output, "w") as output_file:
            _write_report(report, output_file)
        logger.info(f"Wrote output to: {output}")


if __name__ == "__main__":
    main()
