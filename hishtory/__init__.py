"""Shell history records, version parsing, key bindings, query helpers, table layout and highlighting."""

__version__ = "0.1.0"