"""Main CLI entry point."""

import logging
import sys
from pathlib import Path
from typing import Optional

import rich_click as click
from minicomponents import __version__
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.STYLE_HELPTEXT_FIRST = True
click.rich_click.STYLE_COMMANDS_TABLE_SHOW_LINES = False
click.rich_click.STYLE_COMMANDS_TABLE_PAD_EDGE = False
click.rich_click.STYLE_COMMANDS_TABLE_BOX = None
click.rich_click.STYLE_OPTIONS_TABLE_BOX = None
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = (
    "Try running 'minicomponents --help' for more information."
)

# Cyan theme
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_OPTION = "cyan"
click.rich_click.STYLE_SWITCH = "cyan"
click.rich_click.STYLE_METAVAR = "dim white"
click.rich_click.STYLE_USAGE_COMMAND = "cyan"
click.rich_click.STYLE_USAGE = "dim"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
        force=True,
    )


@click.group(
    help=f"""
[bold white on cyan] minicomponents [/] [bold cyan]v{__version__}[/] Component tags for Go templates.

Run [bold cyan]minicomponents rewrite FILE[/] to rewrite a single template.
Run [bold cyan]minicomponents build PAGES_DIR[/] to rewrite a whole tree.
"""
)
@click.version_option(__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    _configure_logging(verbose)


@cli.command()
@click.argument(
    "file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option(
    "--name",
    default=None,
    help="Base name for generated body templates (default: file name without suffix)",
)
@click.option(
    "--components",
    "components_dir",
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory of c-*.html component templates",
)
@click.option(
    "--output",
    "-o",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the result here instead of stdout",
)
def rewrite(
    file: Path,
    name: Optional[str],
    components_dir: Optional[Path],
    output: Optional[Path],
) -> None:
    """Rewrite component tags in a single template."""
    from minicomponents.compiler.build import load_components
    from minicomponents.compiler.components import ComponentRegistry
    from minicomponents.compiler.rewriter import Rewriter

    registry = load_components(components_dir) if components_dir else ComponentRegistry()
    code, err = Rewriter(registry).rewrite(
        file.read_text(encoding="utf-8"), name or file.stem
    )

    if output:
        output.write_text(code, encoding="utf-8")
    else:
        click.echo(code, nl=False)

    if err is not None:
        err.file_path = str(file)
        err_console.print(f"[bold red]✗[/] {escape(str(err))}")
        sys.exit(1)


@cli.command()
@click.argument(
    "pages_dir",
    required=False,
    default="pages",
    type=click.Path(file_okay=False, path_type=Path),
)
@click.option(
    "--components",
    "components_dir",
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory of c-*.html component templates (default: ./components)",
)
@click.option(
    "--out-dir",
    default="build",
    type=click.Path(file_okay=False, path_type=Path),
    help="Output directory for rewritten templates.",
)
def build(pages_dir: Path, components_dir: Optional[Path], out_dir: Path) -> None:
    """Rewrite every page and component template."""
    from minicomponents.compiler.build import build_project

    if not pages_dir.is_dir():
        raise click.BadParameter(
            f"Pages directory '{pages_dir}' does not exist", param_hint="PAGES_DIR"
        )

    console.print(f"🔨 Building [cyan]{escape(str(pages_dir))}[/]...")
    summary = build_project(
        pages_dir=pages_dir, components_dir=components_dir, out_dir=out_dir
    )

    for err in summary.errors:
        err_console.print(f"[bold red]✗[/] {escape(str(err))}")

    if summary.errors:
        console.print(f"❌ Build finished with {len(summary.errors)} errors")
        sys.exit(1)

    console.print(
        "✅ Build complete "
        f"(pages={summary.pages}, components={summary.components}, "
        f"out={escape(str(summary.out_dir))})"
    )


if __name__ == "__main__":
    cli()
