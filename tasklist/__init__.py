"""Read-only task lookup over a directory of text files."""
