"""Looping sample voices, image-driven additive synthesis, stroke rendering and command queues."""

__version__ = "1.0.0"