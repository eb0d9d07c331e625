"""User interfaces for srcfmt."""
