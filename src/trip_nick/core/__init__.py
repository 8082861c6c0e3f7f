"""Core configuration for the Trip Nick backend."""
