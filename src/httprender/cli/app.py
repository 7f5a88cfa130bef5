"""CLI entry point for httprender."""

from __future__ import annotations

import json
import logging
import sys
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from httprender.core.errors import RenderError
from httprender.core.models import (
    CONTENT_BINARY,
    CONTENT_HTML,
    CONTENT_JSON,
    CONTENT_JSONP,
    CONTENT_TEXT,
    CONTENT_XML,
    Head,
    OutputFormat,
)
from httprender.core.sink import ResponseRecorder

if TYPE_CHECKING:
    from httprender.output.base import Renderer

app = typer.Typer(
    name="httprender",
    help="Render a document as an HTTP response body.",
    rich_markup_mode="rich",
)

_DEFAULT_CONTENT_TYPES: dict[OutputFormat, str] = {
    OutputFormat.data: CONTENT_BINARY,
    OutputFormat.html: CONTENT_HTML,
    OutputFormat.json: CONTENT_JSON,
    OutputFormat.jsonp: CONTENT_JSONP,
    OutputFormat.text: CONTENT_TEXT,
    OutputFormat.xml: CONTENT_XML,
}

_RAW_FORMATS = frozenset({OutputFormat.data, OutputFormat.text})


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from httprender import __version__

        typer.echo(f"httprender {__version__}")
        raise typer.Exit()


def _parse_format(value: str) -> OutputFormat:
    """Parse format string to OutputFormat enum."""
    try:
        return OutputFormat(value)
    except ValueError:
        valid = ", ".join(f.value for f in OutputFormat)
        msg = f"Invalid format '{value}'. Choose from: {valid}"
        raise typer.BadParameter(msg) from None


def _configure_logging(verbose: bool) -> None:
    """Send debug logs to stderr through Rich when verbose."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _read_input(source: str | None) -> bytes:
    """Read the input document from a path, or stdin for '-' and None."""
    if source is None or source == "-":
        return sys.stdin.buffer.read()
    return Path(source).read_bytes()


def _to_element(tag: str, value: Any) -> ET.Element:
    """Convert a decoded JSON document to an element tree.

    Objects become child elements per key, arrays repeat an ``item`` child,
    and scalars become text. Null becomes an empty element.
    """
    elem = ET.Element(tag)
    if isinstance(value, dict):
        for key, child in value.items():
            elem.append(_to_element(str(key), child))
    elif isinstance(value, list):
        for child in value:
            elem.append(_to_element("item", child))
    elif isinstance(value, bool):
        elem.text = "true" if value else "false"
    elif value is not None:
        elem.text = str(value)
    return elem


def _build_renderer(
    output_format: OutputFormat,
    head: Head,
    *,
    indent: bool,
    unescape_html: bool,
    prefix: bytes,
    stream: bool,
    callback: str,
    template_dir: Path | None,
    template: str | None,
) -> Renderer:
    """Map CLI options onto a renderer configuration.

    Raises:
        typer.BadParameter: If html is requested without a template.
    """
    if output_format == OutputFormat.data:
        from httprender.output.data_output import DataRenderer

        return DataRenderer(head=head)
    if output_format == OutputFormat.text:
        from httprender.output.text_output import TextRenderer

        return TextRenderer(head=head)
    if output_format == OutputFormat.json:
        from httprender.output.json_output import JsonRenderer

        return JsonRenderer(
            head=head,
            indent=indent,
            unescape_html=unescape_html,
            prefix=prefix,
            streaming=stream,
        )
    if output_format == OutputFormat.jsonp:
        from httprender.output.jsonp_output import JsonpRenderer

        return JsonpRenderer(callback=callback, head=head, indent=indent)
    if output_format == OutputFormat.xml:
        from httprender.output.xml_output import XmlRenderer

        return XmlRenderer(head=head, indent=indent, prefix=prefix)

    if template_dir is None or template is None:
        msg = "The html format needs both --template-dir and --template"
        raise typer.BadParameter(msg)

    from jinja2 import Environment, FileSystemLoader, select_autoescape

    from httprender.output.html_output import HtmlRenderer

    env = Environment(loader=FileSystemLoader(template_dir), autoescape=select_autoescape())
    return HtmlRenderer(name=template, templates=env, head=head)


def _print_headers(recorder: ResponseRecorder) -> None:
    """Print the recorded status line and headers to stderr."""
    table = Table(title=f"HTTP {recorder.status}", title_style="bold", show_header=False)
    table.add_column("Header", style="bold cyan", no_wrap=True)
    table.add_column("Value")
    for name, value in (recorder.sent_headers or {}).items():
        table.add_row(name, value)
    Console(stderr=True).print(table)


@app.command()
def main(
    source: Annotated[
        str | None,
        typer.Argument(help="Input document path, or '-' for stdin (default)."),
    ] = None,
    fmt: Annotated[
        str,
        typer.Option("--format", "-f", help="Body format: data, html, json, jsonp, text, or xml."),
    ] = "json",
    indent: Annotated[
        bool,
        typer.Option("--indent", help="Pretty-print json, jsonp, and xml output."),
    ] = False,
    unescape_html: Annotated[
        bool,
        typer.Option("--unescape-html", help="Emit <, > and & literally in json output."),
    ] = False,
    prefix: Annotated[
        str,
        typer.Option("--prefix", help="Bytes written before json or xml payloads."),
    ] = "",
    stream: Annotated[
        bool,
        typer.Option("--stream", help="Stream json output without buffering."),
    ] = False,
    callback: Annotated[
        str,
        typer.Option("--callback", help="JSONP callback function name."),
    ] = "callback",
    root: Annotated[
        str,
        typer.Option("--root", help="Root element name for xml output."),
    ] = "response",
    status: Annotated[
        int,
        typer.Option("--status", "-s", help="HTTP status code."),
    ] = 200,
    content_type: Annotated[
        str | None,
        typer.Option("--content-type", help="Override the format's default content type."),
    ] = None,
    charset: Annotated[
        str | None,
        typer.Option("--charset", help="Append a charset parameter to the content type."),
    ] = None,
    template_dir: Annotated[
        Path | None,
        typer.Option("--template-dir", help="Directory of Jinja2 templates (html format)."),
    ] = None,
    template: Annotated[
        str | None,
        typer.Option("--template", "-t", help="Template name to execute (html format)."),
    ] = None,
    headers: Annotated[
        bool,
        typer.Option("--headers", help="Print the status line and headers to stderr."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug output to stderr."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Render a JSON document (or raw input for data and text) as a response body.

    The body goes to stdout; with --headers the status and headers go to stderr.
    """
    _configure_logging(verbose)
    output_format = _parse_format(fmt)

    head = Head(content_type or _DEFAULT_CONTENT_TYPES[output_format], status)
    if charset:
        head = head.with_charset(charset)

    renderer = _build_renderer(
        output_format,
        head,
        indent=indent,
        unescape_html=unescape_html,
        prefix=prefix.encode("utf-8"),
        stream=stream,
        callback=callback,
        template_dir=template_dir,
        template=template,
    )

    try:
        raw = _read_input(source)
        if output_format == OutputFormat.data:
            value: Any = raw
        elif output_format == OutputFormat.text:
            value = raw.decode("utf-8")
        else:
            value = json.loads(raw)
            if output_format == OutputFormat.xml:
                value = _to_element(root, value)
    except (FileNotFoundError, IsADirectoryError, ValueError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from None

    recorder = ResponseRecorder()
    try:
        renderer.render(recorder, value)
    except RenderError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None

    if headers:
        _print_headers(recorder)
    typer.echo(recorder.body, nl=False)
