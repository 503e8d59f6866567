"""CLI error handling helpers."""

import asyncio
from typing import Awaitable, TypeVar

import click

from fintrack.domain.errors import DomainError

T = TypeVar("T")


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def run_or_exit(ctx: click.Context, operation: Awaitable[T]) -> T:
    """Run a service coroutine, turning domain errors into a CLI failure."""
    try:
        return asyncio.run(operation)
    except DomainError as e:
        handle_domain_error(ctx, e)
