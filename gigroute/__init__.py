"""gigroute - gig job text parsing and route planning"""

__version__ = "0.1.0"
