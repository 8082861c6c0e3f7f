"""Operational scripts for the Trip Nick backend."""
