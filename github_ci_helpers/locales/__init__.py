"""Translation file sync check for pull requests."""
