"""Domain layer — scalars, codec, payload and on-ledger models, providers.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
