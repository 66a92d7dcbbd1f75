"""Client for a multi-tenant service-booking marketplace, plus a local stub backend."""

__version__ = "0.1.0"
