"""osdeps — OS package-state resolver and installer."""

__version__ = "0.1.0"
