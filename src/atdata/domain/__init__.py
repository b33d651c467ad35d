"""Domain layer — error taxonomy, identifier contract, and the text envelope.

This layer depends only on stdlib.
It must never import from codecs, services, infrastructure, commands, or config.
"""
