"""API routers for the mock backend."""
