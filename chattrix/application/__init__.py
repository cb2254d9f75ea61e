"""Application layer orchestrating repositories and realtime delivery."""
