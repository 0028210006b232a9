"""Infrastructure: repository implementations."""
