"""Infrastructure adapters: storage, platform, HTTP clients and realtime fan-out."""
