"""HTTP API: application factory, auth and top-level routes."""
