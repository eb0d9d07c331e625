"""Platform adapters: logging and filesystem helpers."""
