"""Command group: encode and decode ``$link`` values."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from atdata.commands._base import FORMAT_OPTION, AtdGroup
from atdata.domain.types import WireFormat

if TYPE_CHECKING:
    from atdata.commands._context import AppContext


@click.group(
    cls=AtdGroup,
    examples="""\
  atdata link encode bafyreibfd77vb2setujncomtz3j6xswrmiuxlykora6nogxbr4arhqu2ye
  atdata link encode --format binary --tagged bafyrei...
  atdata link decode '{"$link":"bafyrei..."}'""",
)
def link() -> None:
    """Encode and decode CID links."""


@link.command(
    examples="""\
  atdata link encode bafyreibfd77vb2setujncomtz3j6xswrmiuxlykora6nogxbr4arhqu2ye
  atdata link encode --format binary bafyrei...
  atdata link encode --absent --format binary""",
)
@click.argument("cid", required=False)
@FORMAT_OPTION
@click.option(
    "--tagged/--untagged",
    default=None,
    help="Binary only: wrap in DAG-CBOR tag 42 (default from [codec] tag_links).",
)
@click.option("--absent", is_flag=True, help="Encode an absent link instead of CID.")
@click.pass_obj
def encode(app: AppContext, cid: str | None, fmt: str, tagged: bool | None, absent: bool) -> None:
    """Encode CID as a $link envelope or CBOR."""
    if absent == (cid is not None):
        raise click.UsageError("Pass exactly one of CID or --absent.")
    app.emit(app.converter.encode_link(cid, fmt=WireFormat(fmt), tagged=tagged))


@link.command(
    examples="""\
  atdata link decode '{"$link":"bafyrei..."}'
  atdata link decode --format binary 5824...
  atdata link decode --format binary f6""",
)
@click.argument("data")
@FORMAT_OPTION
@click.pass_obj
def decode(app: AppContext, data: str, fmt: str) -> None:
    """Decode DATA (JSON envelope, or CBOR shown as hex/base64)."""
    app.emit(app.converter.decode_link(data, fmt=WireFormat(fmt)))
