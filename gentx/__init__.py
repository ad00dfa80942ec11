"""gentx — staged, transactional file generation for project trees."""

__version__ = "0.1.0"
