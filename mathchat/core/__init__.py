"""Core subsystem: mixed-content rendering and the streaming relay."""
