"""Computer architecture lab exercises: cache simulators, number formats, graphs and drills."""

__version__ = "0.1.0"