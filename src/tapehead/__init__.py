"""tapehead — stateful random access to files, devices, and pipes."""

__version__ = "0.1.0"
