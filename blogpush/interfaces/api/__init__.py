"""HTTP API exposing the push lifecycle to the UI and the platform."""
