"""fruently CLI Entry Point.

Inspect the effective retry policy and the backoff schedule it produces.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import structlog
import typer

from fruently.core.config import (
    ConfigurationError,
    LoggingConfig,
    get_settings,
)
from fruently.retry.policy import RetryPolicy

log = structlog.get_logger()

app = typer.Typer(
    name="fruently",
    help="fruently - retry policy for Fluent forward clients",
    no_args_is_help=True,
)


def configure_logging(cfg: Optional[LoggingConfig] = None) -> None:
    """Configure structlog from the logging settings section."""
    cfg = cfg or get_settings().logging
    renderer = (
        structlog.dev.ConsoleRenderer()
        if cfg.format == "console"
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(cfg.level)
        ),
        logger_factory=structlog.PrintLoggerFactory(),
    )


def load_config_callback(config: Optional[Path]) -> Optional[Path]:
    """Load configuration file if provided."""
    if config:
        if not config.exists():
            typer.echo(f"Error: Config file '{config}' not found", err=True)
            raise typer.Exit(code=1)

        try:
            get_settings(force_reload=True, system_config_path=config)
        except ConfigurationError as e:
            typer.echo(f"Error loading config: {e}", err=True)
            raise typer.Exit(code=1)

    configure_logging()
    if config:
        log.debug("config_loaded", path=str(config))
    return config


@app.callback()
def main(
    config: Optional[Path] = typer.Option(
        None, "--config", "-c",
        callback=load_config_callback,
        is_eager=True,
        help="Path to configuration file",
    ),
) -> None:
    """fruently CLI."""


def _resolve_policy(
    max_retries: Optional[int],
    multiplier: Optional[float],
    store_file: Optional[Path],
) -> RetryPolicy:
    """Apply command line overrides on top of the configured policy."""
    policy = get_settings().retry.to_policy()
    if max_retries is not None:
        policy = policy.max(max_retries)
    if multiplier is not None:
        policy = policy.with_multiplier(multiplier)
    if store_file is not None:
        policy = policy.store_file(store_file)
    return policy


@app.command("policy")
def show_policy(
    max_retries: Optional[int] = typer.Option(None, "--max-retries", "-n", min=0),
    multiplier: Optional[float] = typer.Option(None, "--multiplier", "-m"),
    store_file: Optional[Path] = typer.Option(None, "--store-file", "-s"),
) -> None:
    """Print the effective retry policy as JSON."""
    policy = _resolve_policy(max_retries, multiplier, store_file)
    payload = policy.to_dict()
    payload["needs_storage"] = policy.needs_storage()
    typer.echo(json.dumps(payload, indent=2))


@app.command("schedule")
def show_schedule(
    max_retries: Optional[int] = typer.Option(None, "--max-retries", "-n", min=0),
    multiplier: Optional[float] = typer.Option(None, "--multiplier", "-m"),
) -> None:
    """Print the wait before each retry attempt, in hours."""
    policy = _resolve_policy(max_retries, multiplier, None)
    steps = policy.schedule()
    if not steps:
        typer.echo("No retries configured (max_retries=0)")
        return

    typer.echo(f"{'attempt':>7}  {'interval_h':>14}  {'elapsed_h':>14}")
    for step in steps:
        typer.echo(
            f"{step.attempt:>7}  {step.interval_hours:>14.4f}  {step.elapsed_hours:>14.4f}"
        )


if __name__ == "__main__":
    app()
