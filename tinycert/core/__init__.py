"""Core TinyCert client components."""
