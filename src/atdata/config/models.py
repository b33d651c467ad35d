"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, atdata.toml only contains overrides.
An absent config file is equivalent to an empty one.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from atdata.domain.types import BinaryDisplay, PayloadInput


class CodecConfig(BaseModel):
    """[codec] section."""

    model_config = {"frozen": True}

    # Emit DAG-CBOR tag 42 for links instead of a bare byte string.
    tag_links: bool = False


class DisplayConfig(BaseModel):
    """[display] section."""

    model_config = {"frozen": True}

    binary: BinaryDisplay = BinaryDisplay.HEX
    payload: PayloadInput = PayloadInput.UTF8


class AtdataConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    codec: CodecConfig = Field(default_factory=CodecConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
