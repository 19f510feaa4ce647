"""CLI subcommands for rustc-meta."""
