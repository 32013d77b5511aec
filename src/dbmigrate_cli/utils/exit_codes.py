"""
Exit codes for dbmigrate-cli.

Semantic exit codes so scripts and CI jobs can tell a bad argument from a
failed migration or an unreachable database.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments, malformed or out-of-range versions
ERROR_INVALID_ARGS = 2

# Migration or prior version not found
ERROR_NOT_FOUND = 3

# A migration failed to load or execute and was rolled back
ERROR_MIGRATION_FAILED = 4

# The version table could not be read or written
ERROR_DATABASE = 5


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
        ERROR_MIGRATION_FAILED: "ERROR_MIGRATION_FAILED",
        ERROR_DATABASE: "ERROR_DATABASE",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def get_exit_code_description(code: int) -> str:
    """Get a human-readable description of an exit code."""
    descriptions = {
        SUCCESS: "Command executed successfully",
        ERROR_GENERAL: "A general error occurred",
        ERROR_INVALID_ARGS: "Invalid arguments or version",
        ERROR_NOT_FOUND: "Migration or version not found",
        ERROR_MIGRATION_FAILED: "Migration failed and was rolled back",
        ERROR_DATABASE: "Schema version table could not be accessed",
    }
    return descriptions.get(code, "Unknown error")
