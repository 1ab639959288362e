"""Local mock of the planning backend for development and tests."""
