"""hubdeps CLI — Typer-based ``dependencies`` command.

Subcommands refreeze the hub image's requirements, list outdated
packages, and bump upstream pins.  Reports use Rich; logs go to stderr.
"""
