"""Print the structure of JSON data as a tree, with field types and optionality.

Accepts a single object or a list of objects. Fields of every object in the list
are merged, and fields missing from some objects (or ever null) are marked as
optional.

Examples:
    $ jsontree users.json
    $ curl -s https://example.com/api/users | jsontree
    $ jsontree https://example.com/api/users --path data.items
    $ jsontree page1.json page2.json.gz
"""

import importlib.metadata
import logging
import sys
from typing import Annotated, Any

import typer
from beartype.door import is_bearable

from jsontree.render import print_tree
from jsontree.schema import analyze_many
from jsontree.util import InputError, load, select

logger = logging.getLogger("jsontree")

app = typer.Typer(
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
)


def _version_callback(show: bool) -> None:
    if show:
        name = "jsontree"
        version = importlib.metadata.version(name)
        print(f"{name} {version}")
        raise typer.Exit()


def _load_document(source: str, path: str | None, timeout: float) -> Any:
    name = "stdin" if source == "-" else source
    try:
        data = load(source, timeout)
    except InputError as e:
        typer.echo(f"Error reading input: {e}", err=True)
        raise typer.Exit(1) from e
    except ValueError as e:
        typer.echo(f"Error parsing JSON from {name}: {e}", err=True)
        raise typer.Exit(1) from e

    if path:
        selected = select(data, path)
        if selected is None:
            typer.echo(f"{name}: key path {path!r} not found.", err=True)
            if is_bearable(data, dict[str, Any]):
                typer.echo(
                    "Found object with keys: " + ", ".join(repr(k) for k in data),
                    err=True,
                )
            raise typer.Exit(1)
        data = selected

    if not is_bearable(data, dict[str, Any] | list[Any]):
        logger.warning(
            "%s: expected an object or a list of objects, got %s",
            name,
            type(data).__name__,
        )
    elif isinstance(data, list) and not is_bearable(data, list[dict[str, Any]]):
        logger.debug("%s: ignoring list elements that are not objects", name)

    return data


@app.command(help=__doc__)
def main(
    sources: Annotated[
        list[str] | None,
        typer.Argument(
            help="JSON files or http(s) URLs. Reads stdin if omitted or '-'."
            " Several inputs are merged into a single tree.",
            show_default=False,
        ),
    ] = None,
    path: Annotated[
        str | None,
        typer.Option(
            "--path",
            "-p",
            help="Path to the key in the JSON object. Example: 'data.items'."
            " Applied to all inputs.",
        ),
    ] = None,
    timeout: Annotated[
        float,
        typer.Option(
            envvar="JSONTREE_TIMEOUT", help="Timeout in seconds for URL inputs."
        ),
    ] = 30.0,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Print debug logs to stderr.")
    ] = False,
    _: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    documents = [_load_document(s, path, timeout) for s in sources or ["-"]]
    tree = analyze_many(documents)

    print_tree(tree)


if __name__ == "__main__":
    app()
