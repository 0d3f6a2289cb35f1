"""Local and in-process implementations."""
