"""goalpath: personal goal tracking on a hosted backend."""

__version__ = "0.1.0"
