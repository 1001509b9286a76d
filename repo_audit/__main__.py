"""
Entry point for running the auditor as a module.

Usage:
    python -m repo_audit --help
    python -m repo_audit repo --owner octo-org --repo octo-repo
"""

from repo_audit.cli import main

if __name__ == "__main__":
    main()
