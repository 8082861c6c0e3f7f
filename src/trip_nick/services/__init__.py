# src/trip_nick/services/__init__.py
"""Business logic services for the Trip Nick application."""
