"""Scalar codecs — ``bytes`` and ``cid-link``.

Each module exposes the same shape: ``encode_text``/``decode_text`` for the
JSON envelope and ``encode_binary``/``decode_binary`` for CBOR streams, plus
``dumps_binary``/``loads_binary`` for whole buffers.
"""
