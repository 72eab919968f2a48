"""CLI interface for retrykit"""

import logging
import random
from pathlib import Path
from typing import Optional

import click
import yaml

from retrykit.domain.policies.base import RetryPolicy
from retrykit.infrastructure.config.config_manager import ConfigManager, ConfigurationError

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    logging.getLogger().setLevel(level)


def _die(message: str, verbose: bool = False, exc: Optional[Exception] = None) -> None:
    """Exit with a user-friendly error message"""
    if exc is not None:
        logger.error(message, exc_info=verbose)
    else:
        logger.error(message)
    raise click.ClickException(message)


def _load_config(ctx) -> ConfigManager:
    verbose = ctx.obj.get("verbose", False)
    try:
        return ConfigManager(config_path=ctx.obj.get("config_path"))
    except ConfigurationError as e:
        _die(str(e), verbose=verbose, exc=e)


def _create_policy(
    config_manager: ConfigManager,
    policy_override: Optional[str],
    seed: Optional[int],
    verbose: bool,
) -> RetryPolicy:
    """Create retry policy from config

    Args:
        config_manager: Configuration manager
        policy_override: Optional policy override from CLI
        seed: Optional seed for reproducible jitter
        verbose: Verbose mode for error reporting
    """
    rng = random.Random(seed) if seed is not None else None
    try:
        return config_manager.create_policy(policy_override, rng=rng)
    except ValueError as e:
        _die(str(e), verbose=verbose, exc=e)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to .retrykit.yml config file",
)
@click.pass_context
def cli(ctx, verbose: bool, config: Path):
    """retrykit - retry decisions with exponential backoff and jitter"""
    ctx.ensure_object(dict)
    setup_logging(verbose)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose


@cli.command()
@click.option(
    "--attempts",
    "-n",
    type=click.IntRange(min=1),
    default=10,
    show_default=True,
    help="Number of consecutive failures to simulate",
)
@click.option("--seed", type=int, help="Seed the jitter generator for reproducible output")
@click.option(
    "--policy",
    type=str,
    help="Retry policy to use (exponential_backoff, no_retry). Overrides config.",
)
@click.pass_context
def schedule(ctx, attempts: int, seed: Optional[int], policy: Optional[str]):
    """Print the retry decision for each consecutive failure."""
    verbose = ctx.obj.get("verbose", False)
    config_manager = _load_config(ctx)
    retry_policy = _create_policy(config_manager, policy, seed, verbose)

    click.echo(f"{'retry':>6}  {'decision':<8}  {'wait (ms)':>12}")
    for count in range(attempts):
        decision = retry_policy.get_retry_decision(count, None)
        action = "retry" if decision.should_retry else "give up"
        wait_ms = decision.wait_seconds * 1000
        click.echo(f"{count:>6}  {action:<8}  {wait_ms:>12.3f}")
        if not decision.should_retry:
            break


@cli.command("show-config")
@click.pass_context
def show_config(ctx):
    """Print the effective retry configuration as YAML."""
    config_manager = _load_config(ctx)
    settings = config_manager.get_settings().model_dump(mode="json")
    click.echo(yaml.safe_dump(settings, sort_keys=False).rstrip())


def main():
    """Main entry point"""
    cli(obj={})


if __name__ == "__main__":
    main()
