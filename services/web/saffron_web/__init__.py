"""Saffron web client: application store and view models over the Saffron API."""
