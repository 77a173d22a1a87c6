"""TinyCert command line interface."""
