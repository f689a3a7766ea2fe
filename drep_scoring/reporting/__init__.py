"""
drep_scoring.reporting — Formatting and export of scoring results.

Formats ``DRepScoreResult`` objects for CLI display and writes them to flat
files.  It does NOT compute anything — all numbers come from the engine.

Modules:
  formatters — ASCII terminal formatters for Typer CLI commands.
  export     — CSV/JSON flat-file export helpers.
"""
