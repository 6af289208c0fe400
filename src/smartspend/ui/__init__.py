"""Browser presentation layer."""
