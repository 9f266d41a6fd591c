"""Stock portfolio tracking service."""
