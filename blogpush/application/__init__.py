"""Application layer orchestrating the push lifecycle."""
