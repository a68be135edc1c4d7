"""Infrastructure layer — SQLite ledger store and provider implementations.

The store persists already-validated records in their binary encoding.
Domain types flow in and out; raw payloads never reach this layer.
"""
