"""CI helpers for checking translation file sync and labeling pull requests contained in a branch."""
