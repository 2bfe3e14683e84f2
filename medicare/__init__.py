"""MediCare Pro hospital records core."""

__version__ = "2.0.0"
