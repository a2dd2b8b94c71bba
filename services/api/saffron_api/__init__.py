"""Saffron recipe site API gateway."""
