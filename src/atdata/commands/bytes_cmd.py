"""Command group: encode and decode ``$bytes`` values."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from atdata.commands._base import FORMAT_OPTION, AtdGroup
from atdata.domain.types import PayloadInput, WireFormat

if TYPE_CHECKING:
    from atdata.commands._context import AppContext


@click.group(
    "bytes",
    cls=AtdGroup,
    examples="""\
  atdata bytes encode "test data"
  atdata bytes encode --input hex 74657374 --format binary
  atdata bytes encode --absent --format binary
  atdata bytes decode '{"$bytes":"dGVzdCBkYXRh"}'
  atdata bytes decode --format binary 4474657374""",
)
def bytes_group() -> None:
    """Encode and decode byte strings."""


@bytes_group.command(
    examples="""\
  atdata bytes encode "hello"
  atdata bytes encode --input base64 aGVsbG8 --format binary
  atdata --json bytes encode --absent --format binary""",
)
@click.argument("payload", required=False)
@FORMAT_OPTION
@click.option(
    "--input",
    "encoding",
    type=click.Choice([e.value for e in PayloadInput]),
    default=None,
    help="How PAYLOAD is written (default from [display] payload).",
)
@click.option("--absent", is_flag=True, help="Encode an absent value instead of PAYLOAD.")
@click.pass_obj
def encode(
    app: AppContext, payload: str | None, fmt: str, encoding: str | None, absent: bool
) -> None:
    """Encode PAYLOAD as a $bytes envelope or CBOR byte string."""
    if absent == (payload is not None):
        raise click.UsageError("Pass exactly one of PAYLOAD or --absent.")
    app.emit(
        app.converter.encode_bytes(
            payload,
            fmt=WireFormat(fmt),
            encoding=PayloadInput(encoding) if encoding else None,
        )
    )


@bytes_group.command(
    examples="""\
  atdata bytes decode '{"$bytes":"aGVsbG8"}'
  atdata bytes decode --format binary 4568656c6c6f
  atdata bytes decode --format binary f6""",
)
@click.argument("data")
@FORMAT_OPTION
@click.pass_obj
def decode(app: AppContext, data: str, fmt: str) -> None:
    """Decode DATA (JSON envelope, or CBOR shown as hex/base64)."""
    app.emit(app.converter.decode_bytes(data, fmt=WireFormat(fmt)))
