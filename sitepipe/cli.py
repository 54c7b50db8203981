"""CLI entry point for sitepipe."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich import print as rprint
from rich.markup import escape
from rich.table import Table

from sitepipe.config import (
    DEFAULT_CONFIG_TEMPLATE,
    DEFAULT_PERMALINK,
    PublishConfig,
    SiteConfig,
    load_site_config,
)
from sitepipe.errors import SitePipeError
from sitepipe.logging_setup import configure_logging
from sitepipe.output import LocalStore
from sitepipe.pipeline import Pipeline, PublishReport
from sitepipe.transform import create_transform

app = typer.Typer(
    name="sitepipe",
    help="Convert front-matter markdown through an external processor into a published tree.",
    add_completion=False,
)


def _display_report(report: PublishReport, dry_run: bool) -> None:
    title = "Publish (dry run)" if dry_run else "Publish"
    table = Table(title=title)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")
    table.add_row("Discovered", str(report.discovered))
    table.add_row("Written", str(report.written))
    table.add_row("Drafts skipped", str(report.drafts_skipped))
    table.add_row("Sections", str(report.sections))
    table.add_row("Errors", str(len(report.errors)))
    table.add_row("Duration", f"{report.duration:.2f}s")
    rprint(table)

    for err in report.errors:
        rprint(f"  [red]error:[/red] {err.stage}: {escape(err.file)}: {escape(err.error)}")


@app.command()
def publish(
    ext: Annotated[str, typer.Option("--ext", help="Extension of the emitted files")] = "md",
    pipe: Annotated[str, typer.Option("--pipe", help="Pipe each page body through this command")] = "",
    source: Annotated[str, typer.Option("--source", "-s", help="Source directory")] = "content",
    destination: Annotated[str, typer.Option("--destination", "-d", help="Output directory")] = "public",
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to site config (default: ./config.toml)")
    ] = None,
    ugly_urls: Annotated[
        bool | None, typer.Option("--ugly-urls/--no-ugly-urls", help="Override uglyURLs from config")
    ] = None,
    build_drafts: Annotated[
        bool | None, typer.Option("--build-drafts/--no-build-drafts", help="Override buildDrafts from config")
    ] = None,
    no_section_list: Annotated[
        bool, typer.Option("--no-section-list", help="Disable section content listings")
    ] = False,
    section_on_root: Annotated[
        str, typer.Option("--section-on-root", help="Also write this section's listing to the root index")
    ] = "posts",
    permalink: Annotated[
        str, typer.Option("--permalink", help="Default permalink pattern")
    ] = DEFAULT_PERMALINK,
    workers: Annotated[int, typer.Option("--workers", "-w", min=1, help="Concurrent transforms")] = 4,
    timeout: Annotated[
        float | None, typer.Option("--timeout", help="Per-page transform timeout in seconds")
    ] = None,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Show what would be written")] = False,
    init_config: Annotated[
        bool, typer.Option("--init-config", help="Write a starter site config and exit")
    ] = False,
    log_level: Annotated[str, typer.Option("--log-level", help="debug | info | warn | error")] = "info",
    log_format: Annotated[str, typer.Option("--log-format", help="text | json")] = "text",
) -> None:
    """Publish a content tree."""
    if init_config:
        target = Path(config or "config.toml")
        if target.exists():
            rprint(f"[yellow]Config already exists:[/yellow] {target}")
            raise typer.Exit(1)
        target.write_text(DEFAULT_CONFIG_TEMPLATE, encoding="utf-8")
        rprint(f"[green]Created[/green] {target}")
        raise typer.Exit(0)

    try:
        opts = PublishConfig(
            ext=ext,
            processor=pipe,
            source=source,
            destination=destination,
            section_list=not no_section_list,
            section_on_root=section_on_root,
            default_permalink=permalink,
            workers=workers,
            transform_timeout=timeout,
            dry_run=dry_run,
            log_level=log_level,
            log_format=log_format,
        )
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    configure_logging(opts.log_level, opts.log_format)

    try:
        site = load_site_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] config: {escape(str(e))}")
        raise typer.Exit(1)

    overrides = {}
    if ugly_urls is not None:
        overrides["ugly_urls"] = ugly_urls
    if build_drafts is not None:
        overrides["build_drafts"] = build_drafts
    if overrides:
        site = SiteConfig.model_validate({**site.model_dump(exclude_unset=True), **overrides})

    rprint(f"[bold]sitepipe:[/bold] converting {opts.source} to {opts.ext} with {opts.processor or '(passthrough)'}")

    pipeline = Pipeline(
        config=opts,
        site=site,
        transform=create_transform(opts.processor, timeout=opts.transform_timeout),
        store=LocalStore(opts.destination, dry_run=opts.dry_run),
    )

    try:
        report = pipeline.run()
    except SitePipeError as e:
        rprint(f"[red]Fatal ({e.stage}):[/red] {escape(str(e))}")
        raise typer.Exit(1)

    _display_report(report, opts.dry_run)


if __name__ == "__main__":
    app()
