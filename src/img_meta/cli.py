import asyncio
from typing import Optional

import typer

from img_meta import __version__
from img_meta.core.config import configs
from img_meta.core.errors import ExtractionError
from img_meta.core.logger import setup_logging
from img_meta.schemas.enum import OutputFormat
from img_meta.services.formatters import format_report
from img_meta.services.pipeline import MetadataPipeline
from img_meta.utils.fileIO import write_file

PROG_NAME = "img-meta"

app = typer.Typer(add_completion=False)


def _version_callback(value: bool):
    if value:
        typer.echo(f"{PROG_NAME} {__version__}")
        raise typer.Exit()


async def _run(
    input_directory: str,
    ext: str,
    output_format: OutputFormat,
    concurrency: int,
    output: Optional[str],
    include_hidden: bool,
) -> Optional[str]:
    pipeline = MetadataPipeline(concurrency_limit=concurrency, include_hidden=include_hidden)
    report = await pipeline.run(input_directory, ext)

    invocation = [PROG_NAME, input_directory, "--ext", ext, "--format", output_format.value]
    if include_hidden:
        invocation.append("--include-hidden")
    text = format_report(report, output_format, invocation)

    if output:
        await write_file(output, text)
        return None
    return text


@app.command()
def main(
    input_directory: str = typer.Argument(..., help="Directory containing images to process"),
    ext: str = typer.Option(
        configs.DEFAULT_EXTENSIONS, "--ext", help="Comma-separated list of file extensions to process"
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat(configs.OUTPUT_FORMAT), "--format", "-f", help="data: JSON document, source: TypeScript module"
    ),
    concurrency: int = typer.Option(
        configs.CONCURRENCY_LIMIT, "--concurrency", "-c", min=1, help="Maximum number of images processed at once"
    ),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write the report to this file instead of stdout"),
    include_hidden: bool = typer.Option(False, "--include-hidden", help="Also process dot-files and dot-directories"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Overrides IMG_META_LOG_LEVEL"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit"
    ),
):
    """
    Process a directory, outputting a single report that describes all the images contained within.
    """
    setup_logging(log_level)

    try:
        text = asyncio.run(_run(input_directory, ext, output_format, concurrency, output, include_hidden))
    except ExtractionError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if text is not None:
        typer.echo(text, nl=False)
