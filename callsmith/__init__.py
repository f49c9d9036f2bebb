"""CallSmith: places appointment-booking phone calls on a user's behalf."""

__version__ = "0.1.0"
