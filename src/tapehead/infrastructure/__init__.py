"""Infrastructure layer: opening and driving the underlying byte stream.

This layer depends on the stdlib and on domain types only.
It must never import from services, commands, or output.
"""
