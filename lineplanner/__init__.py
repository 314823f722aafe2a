"""LinePlanner — capacity balancing and floor layout for garment sewing lines."""

__version__ = "0.1.0"
