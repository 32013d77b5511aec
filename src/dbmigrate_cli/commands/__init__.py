"""Command implementations for the dbmigrate CLI."""
