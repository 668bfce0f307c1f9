__version__ = "v0.98.1"
