"""Service layer: the session executor and the CommandResult it returns.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""
