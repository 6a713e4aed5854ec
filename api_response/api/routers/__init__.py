"""Routers bundled with the application factory."""
