"""
multicode: tabbed sections for .multicode / .qna Divs in pandoc documents.

Usage:
  multicode filter [FORMAT]
  multicode convert [OPTIONS] SRC
  multicode inspect [OPTIONS] SRC

Examples:
  pandoc notes.md --filter multicode-filter -o notes.html
  pandoc notes.md -t json | multicode filter html | pandoc -f json -o notes.html
  multicode convert notes.md --to latex -o notes.tex -v
  multicode inspect notes.md --to ipynb -m targets.yaml
"""

import logging
import sys
from pathlib import Path

import orjson
import pandoc
import typer

from multicode.config import read_metadata_file
from multicode.emit import Host
from multicode.filter import MulticodeFilter

app = typer.Typer(help=__doc__, no_args_is_help=True)


def setup_logging(verbose: int):
    """Set up logging based on verbosity level."""
    if verbose == 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:  # verbose >= 2
        level = logging.DEBUG

    # stderr only: stdout carries the document
    logging.basicConfig(level=level, format="%(levelname)s:%(name)s:%(message)s")


def build_filter(
    output_format: str | None,
    metadata_file: Path | None,
    default_target: str | None,
) -> MulticodeFilter:
    extra_meta = []
    if metadata_file is not None:
        try:
            extra_meta.append(read_metadata_file(metadata_file))
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="--metadata-file") from e
    return MulticodeFilter(
        Host(output_format=output_format),
        extra_meta=extra_meta,
        default_target=default_target,
    )


def read_document(src: Path, from_format: str | None):
    try:
        return pandoc.read(file=str(src), format=from_format)
    except Exception as e:
        raise RuntimeError(f"Failed to read {src} with pandoc: {e}") from e


METADATA_FILE_OPTION = typer.Option(
    None,
    "--metadata-file",
    "-m",
    exists=True,
    dir_okay=False,
    help="YAML file with multicode targets; fills formats the document leaves unset",
)
DEFAULT_TARGET_OPTION = typer.Option(
    None,
    "--default-target",
    "-t",
    help="Target for every format the document leaves unset, including formats "
    "without a metadata slot: both | question | answer",
)
VERBOSE_OPTION = typer.Option(
    0,
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v for INFO, -vv for DEBUG)",
)


@app.command("filter", help="Run as a pandoc JSON filter (stdin -> stdout).")
def filter_json(
    output_format: str = typer.Argument(
        "html", help="Target format; pandoc passes it as the first argument"
    ),
    metadata_file: Path = METADATA_FILE_OPTION,
    default_target: str = DEFAULT_TARGET_OPTION,
    verbose: int = VERBOSE_OPTION,
) -> None:
    """Read a pandoc JSON AST on stdin and write the transformed AST to stdout."""
    setup_logging(verbose)
    doc = pandoc.read(sys.stdin.read(), format="json")
    build_filter(output_format, metadata_file, default_target).apply(doc)
    typer.echo(pandoc.write(doc, format="json"), nl=False)


@app.command("convert", help="Convert a document with pandoc, applying multicode.")
def convert(
    src: Path = typer.Argument(..., exists=True, dir_okay=False, help="Source document"),
    to: str = typer.Option("html", "--to", help="pandoc output format"),
    from_format: str = typer.Option(
        None, "--from", help="pandoc input format (default: from the extension)"
    ),
    output: Path = typer.Option(
        None, "--output", "-o", help="Output file (default: stdout)"
    ),
    metadata_file: Path = METADATA_FILE_OPTION,
    default_target: str = DEFAULT_TARGET_OPTION,
    verbose: int = VERBOSE_OPTION,
) -> None:
    """Read SRC, transform its multicode Divs for TO, and write the result."""
    setup_logging(verbose)
    doc = read_document(src, from_format)
    build_filter(to, metadata_file, default_target).apply(doc)

    if output is not None:
        pandoc.write(doc, file=str(output), format=to)
        logging.info(f"Wrote {output}")
        return
    result = pandoc.write(doc, format=to)
    if isinstance(result, bytes):
        raise typer.BadParameter(
            f"Format {to!r} is binary; use --output", param_hint="--to"
        )
    typer.echo(result, nl=False)


@app.command("inspect", help="Describe each multicode Div as a JSON line.")
def inspect(
    src: Path = typer.Argument(..., exists=True, dir_okay=False, help="Source document"),
    to: str = typer.Option("html", "--to", help="Output format to resolve targets for"),
    from_format: str = typer.Option(None, "--from", help="pandoc input format"),
    metadata_file: Path = METADATA_FILE_OPTION,
    default_target: str = DEFAULT_TARGET_OPTION,
    verbose: int = VERBOSE_OPTION,
) -> None:
    """Print how every matching Div would be split and emitted."""
    setup_logging(verbose)
    doc = read_document(src, from_format)
    mf = build_filter(to, metadata_file, default_target)
    for index, described in enumerate(mf.describe(doc)):
        record = {"index": index, **described}
        typer.echo(orjson.dumps(record).decode("utf-8"))


def filter_main() -> None:
    """Entry point for ``pandoc --filter multicode-filter``."""
    typer.run(filter_json)


if __name__ == "__main__":
    app()
