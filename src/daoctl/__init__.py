"""daoctl — DAO governance primitives and ledger tooling."""

__version__ = "0.1.0"
