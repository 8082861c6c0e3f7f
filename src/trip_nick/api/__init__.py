"""HTTP API for the Trip Nick backend."""
