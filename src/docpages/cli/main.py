"""Main CLI entry point for docpages."""

import asyncio
import json
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from docpages import __version__
from docpages.config import DocPagesConfig, load_config
from docpages.context.metadata_loader import MetadataLoader
from docpages.context.resolver import parse_slug
from docpages.orchestration.builder import BuildResult, SiteBuilder
from docpages.orchestration.progress import ProgressTracker
from docpages.utils.logging import setup_logging

# Create the main Typer app
app = typer.Typer(
    name="docpages",
    help="Build static pages for versioned AsciiDoc documentation.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Console for rich output
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"docpages version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Versioned AsciiDoc documentation pages.

    Converts extracted AsciiDoc sources to HTML and renders one static page
    per documentation entry, plus an index page per version.
    """
    pass


def _print_summary(result: BuildResult) -> None:
    """Print a summary table of the build."""
    table = Table(title="Build Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Versions", ", ".join(result.versions) or "-")
    table.add_row("Pages Written", str(result.pages_written))
    table.add_row("Conversions", str(result.cache_misses))
    table.add_row("Cache Hits", str(result.cache_hits))
    table.add_row("Duration", f"{result.duration_seconds:.1f} seconds")
    table.add_row("Output", str(result.output_path))

    console.print(table)


def _fail(e: Exception, verbose: int) -> None:
    console.print(f"\n[bold red]Error:[/bold red] {e}")
    if verbose >= 2:
        console.print_exception()
    sys.exit(1)


# Common options used across commands
ConfigOption = Annotated[
    Optional[Path],
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration file.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
]

DocsRootOption = Annotated[
    Optional[Path],
    typer.Option(
        "--docs-root",
        "-d",
        help="Directory containing the extracted AsciiDoc sources.",
    ),
]

MetadataOption = Annotated[
    Optional[Path],
    typer.Option(
        "--metadata",
        "-m",
        help="Directory containing one metadata descriptor per version.",
        file_okay=False,
        dir_okay=True,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        help="Verbosity level (0=quiet, 1=normal, 2=verbose, 3=debug).",
        min=0,
        max=3,
        count=True,
    ),
]


def _configure(
    config: Optional[Path],
    verbose: int,
    **overrides,
) -> DocPagesConfig:
    cfg = load_config(config_path=config, verbose=verbose, **overrides)
    setup_logging(verbosity=verbose, log_file=cfg.log_file)
    return cfg


@app.command()
def build(
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Output directory for the static site.",
        ),
    ] = None,
    docs_root: DocsRootOption = None,
    metadata: MetadataOption = None,
    config: ConfigOption = None,
    verbose: VerboseOption = 1,
    asciidoctor: Annotated[
        Optional[str],
        typer.Option(
            "--asciidoctor",
            help="Asciidoctor executable.",
        ),
    ] = None,
    highlighter: Annotated[
        Optional[str],
        typer.Option(
            "--highlighter",
            help="Syntax highlighter for source blocks (pygments or none).",
        ),
    ] = None,
    concurrency: Annotated[
        Optional[int],
        typer.Option(
            "--concurrency",
            help="Maximum pages rendered concurrently.",
            min=1,
            max=64,
        ),
    ] = None,
) -> None:
    """Build every documentation page.

    Example:
        docpages build --docs-root docs/extracted --output out
    """
    cfg = _configure(
        config,
        verbose,
        docs_root=docs_root,
        metadata=metadata,
        output=output,
        asciidoctor=asciidoctor,
        highlighter=highlighter,
        concurrency=concurrency,
    )

    console.print("[bold green]Building documentation pages[/bold green]")
    console.print(f"  Sources:  {cfg.docs.extracted_path}")
    console.print(f"  Metadata: {cfg.docs.metadata_path}")
    console.print(f"  Output:   {cfg.output.output_path}")
    console.print()

    try:
        builder = SiteBuilder(
            config=cfg,
            progress_tracker=ProgressTracker(console=console, show_progress=verbose > 0),
        )
        result = asyncio.run(builder.build())
        _print_summary(result)

    except KeyboardInterrupt:
        console.print("\n[yellow]Build interrupted by user[/yellow]")
        sys.exit(1)
    except Exception as e:
        _fail(e, verbose)


@app.command()
def paths(
    docs_root: DocsRootOption = None,
    metadata: MetadataOption = None,
    config: ConfigOption = None,
    verbose: VerboseOption = 1,
) -> None:
    """List the static paths a build would render."""
    cfg = _configure(config, verbose, docs_root=docs_root, metadata=metadata)

    try:
        builder = SiteBuilder(config=cfg)
        static_paths = asyncio.run(builder.get_static_paths())
    except Exception as e:
        _fail(e, verbose)
        return

    for path in static_paths:
        console.print(path.key, highlight=False, markup=False)


@app.command()
def versions(
    metadata: MetadataOption = None,
    config: ConfigOption = None,
    verbose: VerboseOption = 1,
) -> None:
    """List the known documentation versions."""
    cfg = _configure(config, verbose, metadata=metadata)

    try:
        collection = asyncio.run(MetadataLoader(cfg.docs.metadata_path).load_all())
    except Exception as e:
        _fail(e, verbose)
        return

    table = Table(title="Documentation Versions")
    table.add_column("Version", style="cyan")
    table.add_column("Categories", justify="right")
    table.add_column("Entries", justify="right")

    for entry in collection:
        table.add_row(
            entry.version,
            str(len(entry.metadata.categories)),
            str(entry.metadata.entry_count),
        )

    console.print(table)


@app.command()
def render(
    slug: Annotated[
        str,
        typer.Argument(help="Page slug, e.g. 4.x/core"),
    ],
    props: Annotated[
        bool,
        typer.Option(
            "--props",
            help="Print the page data as JSON instead of HTML.",
        ),
    ] = False,
    docs_root: DocsRootOption = None,
    metadata: MetadataOption = None,
    config: ConfigOption = None,
    verbose: VerboseOption = 0,
) -> None:
    """Render a single page to stdout.

    Example:
        docpages render 4.x/core --props
    """
    cfg = _configure(config, verbose, docs_root=docs_root, metadata=metadata)
    builder = SiteBuilder(config=cfg)
    segments = parse_slug(slug)

    try:
        if props:
            page = asyncio.run(builder.get_static_props(segments))
            output = json.dumps(page.model_dump(exclude_none=True), indent=2)
        else:
            output = asyncio.run(builder.render_slug(segments))
    except Exception as e:
        _fail(e, verbose)
        return

    typer.echo(output)


if __name__ == "__main__":
    app()
