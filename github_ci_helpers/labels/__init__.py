"""Branch label reconciliation for open pull requests."""
