"""Vehicle-to-vehicle collision avoidance: sensor drivers, frame exchange and warning features."""

__version__ = "0.1.0"