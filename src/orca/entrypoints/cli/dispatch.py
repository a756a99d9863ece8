"""ORCA dispatch commands.

Both commands act on a dispatcher loaded from a ``module:attribute`` target
(``--target`` or ``ORCA_TARGET``). Importing the module is expected to perform
the application's registrations.

Behavior
- ``run`` dispatches the given namespaces; status lines go to **stderr**.
- ``tree`` prints the namespace tree to **stdout**.

Failure modes
- Unloadable target → usage error naming the target.
- A callback raising → ``ClickException`` carrying the callback's error; the
  remaining callbacks of that run are skipped.
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from orca.config import TARGET_ENV
from orca.dispatcher import Dispatcher, callback_name

from .helpers import error, parse_target, success, warn

logger = logging.getLogger(__name__)

target_option = click.option(
    "--target",
    "-t",
    "dispatcher",
    required=True,
    envvar=TARGET_ENV,
    show_envvar=True,
    callback=parse_target,
    help="Dispatcher to use, as module:attribute (attribute defaults to 'dispatcher').",
)


@click.command()
@target_option
@click.argument("namespaces", nargs=-1)
@click.option(
    "--globals/--no-globals",
    "run_globals",
    default=True,
    show_default=True,
    help="Run the callbacks of the global namespace first.",
)
def run(dispatcher: Dispatcher, namespaces: tuple[str, ...], run_globals: bool) -> None:
    """Run NAMESPACES and every namespace beneath them."""
    called = ([dispatcher.global_key] if run_globals else []) + list(namespaces)
    if not called:
        warn("Nothing to run: no namespaces given and globals disabled.")
        return

    try:
        dispatcher.run(list(namespaces), run_globals=run_globals)
    except Exception as e:  # pylint: disable=broad-except
        error(f"Run aborted: {type(e).__name__}: {e}")
        raise click.ClickException("A callback failed; remaining callbacks were skipped.") from e

    success(f"Ran namespaces: {', '.join(dict.fromkeys(called))}")


@click.command()
@target_option
def tree(dispatcher: Dispatcher) -> None:
    """Show the namespace tree and its callbacks, highest priority first."""
    registrations = list(dispatcher.registrations())
    if not registrations:
        warn("No callbacks registered.")
        return

    root = Tree("[bold]namespaces[/bold]")
    nodes: dict[str, Tree] = {}
    for registration in registrations:
        node = root
        path = ""
        for segment in registration.namespace.split("."):
            path = f"{path}.{segment}" if path else segment
            if path not in nodes:
                label = escape(segment)
                if path == dispatcher.global_key:
                    label = f"{label} [dim](global)[/dim]"
                nodes[path] = node.add(f"[cyan]{label}[/cyan]")
            node = nodes[path]

        entry = registration.entry
        label = f"[yellow]\\[{registration.priority}][/yellow] {escape(callback_name(entry.func))}"
        if entry.excludes:
            label += f" [dim]excludes {escape(', '.join(entry.excludes))}[/dim]"
        node.add(label)

    Console().print(root)
    logger.debug("Rendered %d callbacks", len(registrations))
