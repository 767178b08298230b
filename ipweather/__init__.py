"""Public IP -> geolocation -> NWS forecast pipeline."""

__version__ = "0.1.0"
