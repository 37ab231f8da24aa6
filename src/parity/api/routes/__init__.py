"""Routes mounted outside the versioned API prefix."""
