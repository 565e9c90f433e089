"""Entry point for running enumparse as a module."""

from .cli import app

app(prog_name="enumparse")
