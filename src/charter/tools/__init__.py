"""Debug instrumentation and rendering helpers."""
