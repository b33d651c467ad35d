"""Subcommand modules for atdata.

register_commands() defers imports so ``atdata --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``bytes`` and ``link`` command groups on the root group."""
    from atdata.commands.bytes_cmd import bytes_group
    from atdata.commands.link import link

    cli.add_command(bytes_group)
    cli.add_command(link)
