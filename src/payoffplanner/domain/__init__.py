"""Domain-level repository interfaces."""
