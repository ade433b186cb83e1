"""CLI for the place confidence estimator.

Commands:
- estimate: Estimate confidence for one place from a signal file or options
- resolve: Show which category profile a category/place name resolves to
- profiles: List the active category profile table in priority order
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Protocol

import typer
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .application.category_profiles import resolve_category_profile_table
from .application.estimation import (
    AggregateCountResult,
    EstimationOutcome,
    InsufficientData,
    StarDistributionResult,
    estimate_signal,
)
from .application.review_signals import (
    build_review_signal,
    load_review_signal,
    parse_star_counts_text,
)
from .config import EstimatorConfig
from .domain.category_profiles import CategoryProfileTable, resolve_category_profile
from .domain.estimates import Estimate
from .domain.review_signals import RawReviewSignal, confidence_band
from .exceptions import PlaceConfidenceError, StarCountsFormatError
from .protocols import FileSystem

_BAND_STYLES = {"high": "green", "medium": "yellow", "low": "red"}


class DependenciesBuilder(Protocol):
    """Protocol for constructing CLI dependencies."""

    def __call__(self, *, config: EstimatorConfig) -> CliDependencies:
        """Build dependencies for CLI commands."""
        ...


@dataclass(frozen=True)
class CliDependencies:
    """Concrete dependencies required by the CLI."""

    fs: FileSystem


@dataclass(frozen=True)
class CliContext:
    """Runtime CLI context for a single command invocation."""

    config: EstimatorConfig
    deps_builder: DependenciesBuilder

    def build_dependencies(self, *, config: EstimatorConfig | None = None) -> CliDependencies:
        """Return dependencies using the configured builder."""
        return self.deps_builder(config=config or self.config)


class CliContextNotInitialisedError(typer.BadParameter):
    """Raised when CLI context is missing."""

    def __init__(self) -> None:
        super().__init__("CLI context is not initialised. Use the place-confidence entry point.")


def _version_callback(value: bool) -> None:
    if value:
        rprint(f"place-confidence {__version__}")
        raise typer.Exit()


def _get_context(ctx: typer.Context) -> CliContext:
    if not isinstance(ctx.obj, CliContext):
        raise CliContextNotInitialisedError()
    return ctx.obj


def _parse_stars_option(value: str | None) -> tuple[int, ...] | None:
    if value is None:
        return None
    try:
        return parse_star_counts_text(value)
    except StarCountsFormatError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _load_table(config: EstimatorConfig, fs: FileSystem) -> CategoryProfileTable:
    try:
        return resolve_category_profile_table(path=config.category_profiles_path, fs=fs)
    except PlaceConfidenceError as exc:
        rprint(f"[red]✗ {exc}[/red]")
        raise typer.Exit(code=2) from exc


def _format_percent(value: float) -> str:
    return f"{value:.2f}%"


def _print_estimate(estimate: Estimate) -> None:
    style = _BAND_STYLES[confidence_band(estimate.point_percent)]
    rprint(
        f"[bold]Estimated confidence:[/bold] "
        f"[bold {style}]{_format_percent(estimate.point_percent)}[/bold {style}]"
    )
    rprint(
        f"[bold]95% confidence interval:[/bold] "
        f"[{_format_percent(estimate.lower_percent)} - {_format_percent(estimate.upper_percent)}]"
    )


def _print_outcome(signal: RawReviewSignal, outcome: EstimationOutcome) -> None:
    if isinstance(outcome, InsufficientData):
        rprint(f"[red]✗ Not enough data:[/red] {outcome.message}")
        return

    rprint(f"[bold]Place:[/bold] {escape(outcome.place_name)}")
    rprint(f"[bold]Category:[/bold] {escape(signal.category)} (profile: {outcome.match.key})")
    rprint(f"[bold]Total reviews:[/bold] {outcome.reviews_count:,}")

    if isinstance(outcome, StarDistributionResult):
        lower_stars, upper_stars = outcome.star_interval
        rprint(f"[bold]Mean star rating:[/bold] {outcome.statistics.mean:.2f}")
        rprint(f"[bold]95% CI for mean stars:[/bold] [{lower_stars:.2f} - {upper_stars:.2f}]")
        _print_estimate(outcome.estimate)
        rprint("  (derived from the mean star rating and its interval)")
        if outcome.degenerate:
            rprint("[yellow]Only one review: the interval carries no spread information.[/yellow]")
        return

    if isinstance(outcome, AggregateCountResult):
        _print_estimate(outcome.estimate)
        rprint("  (derived from the review count and category profile)")
        rprint(f"  Star distribution unavailable: {outcome.star_distribution_gap}")


def create_app(deps_builder: DependenciesBuilder) -> typer.Typer:
    """Create a Typer app wired with the provided dependencies builder."""
    app = typer.Typer(
        add_completion=False,
        help="Estimate place confidence from review counts and star distributions",
    )

    @app.callback()
    def main(
        ctx: typer.Context,
        profiles: Annotated[
            Path | None,
            typer.Option(
                "--profiles",
                help="Category profile table JSON (default: CATEGORY_PROFILES_PATH or built-in)",
            ),
        ] = None,
        version: Annotated[
            bool,
            typer.Option(
                "--version",
                callback=_version_callback,
                is_eager=True,
                help="Show the installed version and exit",
            ),
        ] = False,
    ) -> None:
        """Initialise CLI context."""
        _ = version
        config = EstimatorConfig.from_env()
        if profiles is not None:
            config = config.with_overrides(category_profiles_path=str(profiles))
        ctx.obj = CliContext(config=config, deps_builder=deps_builder)

    @app.command()
    def estimate(
        ctx: typer.Context,
        signal_path: Annotated[
            Path | None,
            typer.Option(
                "--signal",
                "-s",
                help="Review signal JSON file (overrides the individual options)",
            ),
        ] = None,
        place: Annotated[
            str | None,
            typer.Option("--place", "-p", help="Place name"),
        ] = None,
        category: Annotated[
            str | None,
            typer.Option("--category", "-c", help="Place category label"),
        ] = None,
        reviews: Annotated[
            int | None,
            typer.Option("--reviews", "-r", min=0, help="Total review count"),
        ] = None,
        stars: Annotated[
            str | None,
            typer.Option(
                "--stars",
                help="Review counts per star, 5★ first (e.g. 120,40,10,5,3)",
            ),
        ] = None,
        require_stars: Annotated[
            bool,
            typer.Option(
                "--require-stars",
                help="Report insufficient data instead of using the review-count heuristic",
            ),
        ] = False,
        base_error: Annotated[
            float | None,
            typer.Option(
                "--base-error",
                help="Override the heuristic base error magnitude (default: 20)",
            ),
        ] = None,
    ) -> None:
        """Estimate confidence for one place."""
        state = _get_context(ctx)
        config = state.config
        if base_error is not None:
            if base_error <= 0.0:
                raise typer.BadParameter("--base-error must be positive.")
            config = config.with_overrides(base_error_magnitude=base_error)
        deps = state.build_dependencies(config=config)
        star_counts = _parse_stars_option(stars)

        if signal_path is not None:
            try:
                signal = load_review_signal(path=signal_path, fs=deps.fs)
            except PlaceConfidenceError as exc:
                rprint(f"[red]✗ {exc}[/red]")
                raise typer.Exit(code=2) from exc
        else:
            signal = build_review_signal(
                place_name=place,
                reviews_count=reviews,
                category=category,
                star_counts=star_counts,
            )

        table = _load_table(config, deps.fs)
        outcome = estimate_signal(
            signal,
            table,
            config.estimation_constants(),
            require_star_distribution=require_stars,
        )
        _print_outcome(signal, outcome)
        if isinstance(outcome, InsufficientData):
            raise typer.Exit(code=1)

    @app.command()
    def resolve(
        ctx: typer.Context,
        category: Annotated[
            str,
            typer.Option("--category", "-c", help="Place category label"),
        ] = "",
        place: Annotated[
            str,
            typer.Option("--place", "-p", help="Place name"),
        ] = "",
    ) -> None:
        """Show the category profile a category label or place name resolves to."""
        state = _get_context(ctx)
        deps = state.build_dependencies()
        table = _load_table(state.config, deps.fs)
        match = resolve_category_profile(category, place, table)
        rprint(f"[green]✓ Matched profile:[/green] {match.key}")
        rprint(f"  max_reviews: {match.profile.max_reviews:,}")
        rprint(f"  weight: {match.profile.weight}")
        rprint(f"  base_uncertainty_factor: {match.profile.base_uncertainty_factor}")

    @app.command(name="profiles")
    def list_profiles(ctx: typer.Context) -> None:
        """List category profiles in match priority order."""
        state = _get_context(ctx)
        deps = state.build_dependencies()
        table = _load_table(state.config, deps.fs)

        grid = Table(title="Category profiles (first match wins)")
        grid.add_column("#", justify="right")
        grid.add_column("Key")
        grid.add_column("Max reviews", justify="right")
        grid.add_column("Weight", justify="right")
        grid.add_column("Base uncertainty", justify="right")
        for position, (key, profile) in enumerate(table.entries, start=1):
            grid.add_row(
                str(position),
                key,
                f"{profile.max_reviews:,}",
                f"{profile.weight:.2f}",
                f"{profile.base_uncertainty_factor:.2f}",
            )
        fallback = table.fallback
        grid.add_row(
            "-",
            "Generic (fallback)",
            f"{fallback.max_reviews:,}",
            f"{fallback.weight:.2f}",
            f"{fallback.base_uncertainty_factor:.2f}",
        )
        Console().print(grid)

    _ = (main, estimate, resolve, list_profiles)

    return app
