"""Command-line tools for uProtocol CloudEvents."""
