"""Tour bookings API - unified booking lifecycle for tours, guides and custom trips."""

__version__ = "0.1.0"
