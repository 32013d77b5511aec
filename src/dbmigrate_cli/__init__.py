"""dbmigrate-cli: versioned schema migrations for relational databases."""

__version__ = "0.1.0"
