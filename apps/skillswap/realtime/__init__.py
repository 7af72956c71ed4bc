"""Realtime presence, relays and scheduling on the API event loop."""
