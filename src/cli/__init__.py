"""Command-line interface for next-toolchain.

The Typer application lives in src.cli.app.
"""
