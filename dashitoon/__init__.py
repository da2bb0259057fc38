"""DashiToon web-serial publishing platform backend."""

__version__ = "0.1.0"
