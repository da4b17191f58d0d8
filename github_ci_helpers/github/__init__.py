"""GitHub API client and adapter."""
