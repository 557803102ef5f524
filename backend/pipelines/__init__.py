"""Pipeline catalog, validation, code generation and export endpoints."""
