"""Infrastructure layer — adapters over third-party codecs.

``cbor`` wraps cbor2 and ``cid`` wraps multiformats. Both translate library
exceptions into :mod:`atdata.domain.errors` types.
"""
