"""Service layer — the operations the CLI (and any other caller) invokes."""
