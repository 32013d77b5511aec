"""Services wiring the migration core to configuration and the filesystem."""
