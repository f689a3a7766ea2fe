"""
Ingestion layer — local snapshot files into scoring inputs.

Submodules:
  snapshot_loader — JSON snapshot / batch parsing into DRepScoringInput,
                    with proposal fields embedded into votes.

Fetching from a chain indexer happens upstream; this package only reads
files already on disk.
"""
