"""sphinxql: build SphinxQL statements with positional bind values."""

from sphinxql.query import Statement, StatementBuilder

__version__ = "0.1.0"

__all__ = ["Statement", "StatementBuilder", "__version__"]
