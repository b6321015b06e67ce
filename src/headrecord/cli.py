from pathlib import Path

import orjson
import typer
from rich.console import Console
from rich.markup import escape

from headrecord.converter import convert
from headrecord.record import HEAD_RECORD_FILENAME, OutputWriteError
from headrecord.schema import FatalConversionError, FieldDescriptor

app = typer.Typer(
    help=f"Convert a JSON field schema into a CBOR head record ({HEAD_RECORD_FILENAME}).",
    add_completion=False,
)
console = Console(stderr=True)

EXIT_FATAL = 2
# -1 as seen by the shell.
EXIT_WRITE_FAILED = 255


def _fatal(message: str) -> typer.Exit:
    console.print(f"[bold red]fatal:[/] {escape(message)}", soft_wrap=True)
    return typer.Exit(code=EXIT_FATAL)


def _trace_field(desc: FieldDescriptor) -> None:
    extra = f" {orjson.dumps(desc.extra).decode()}" if desc.extra else ""
    console.print(
        f"[cyan]{escape(desc.name)}[/] type={escape(desc.type)}{escape(extra)}", soft_wrap=True
    )


# No help option: every argument, --help included, is a candidate input path.
@app.command(
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "help_option_names": [],
    },
)
def convert_schema(
    args: list[str] | None = typer.Argument(
        None, help="Input schema; only the last argument is used.", show_default=False
    ),
) -> None:
    """Write headRecord.cbor in the current directory from a JSON schema file."""
    if not args:
        raise _fatal("required argument: file.json")
    input_path = Path(args[-1])

    try:
        result = convert(input_path, on_field=_trace_field)
    except FatalConversionError as exc:
        raise _fatal(str(exc)) from exc
    except OutputWriteError as exc:
        console.print(f"[bold yellow]warning:[/] {escape(str(exc))}", soft_wrap=True)
        raise typer.Exit(code=EXIT_WRITE_FAILED) from exc

    console.print(
        f"[bold green]Wrote[/] {result.encoded_bytes} bytes "
        f"({len(result.fields)} fields) to {escape(str(result.output_path))}",
        soft_wrap=True,
    )


if __name__ == "__main__":
    app()
