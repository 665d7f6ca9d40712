"""Application layer: commands, queries, ports and run orchestration."""
