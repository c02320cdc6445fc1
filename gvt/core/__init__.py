"""Core repository model: versions, snapshots and the tracked index."""
