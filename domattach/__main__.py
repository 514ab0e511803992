"""Run domattach CLI."""

from domattach.cli import run


run()
