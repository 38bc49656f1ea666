"""HTTP host."""
