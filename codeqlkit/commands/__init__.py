"""CLI commands for codeqlkit."""
