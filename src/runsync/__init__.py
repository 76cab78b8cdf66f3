"""RunSync: workout synchronization and route analytics."""

__version__ = "0.1.0"
