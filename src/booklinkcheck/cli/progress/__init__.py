"""Progress displays for the CLI."""
