"""Teachmate command-line interface.

Commands live in submodules under `teachmate.cli.*` and register themselves
on the root group.
"""

from __future__ import annotations

import click

from teachmate.app_version import get_app_version
from teachmate.observability import init_observability


@click.group()
@click.version_option(version=get_app_version(), prog_name="teachmate")
def cli() -> None:
    """Teachmate - teacher assistant with grounded answers."""
    init_observability()


def _register_commands() -> None:
    from teachmate.cli import chat, knowledge, serve

    chat.register(cli)
    knowledge.register(cli)
    serve.register(cli)


_register_commands()


if __name__ == "__main__":
    cli()
