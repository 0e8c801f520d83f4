"""AWS API operations exposed as flow automation blocks."""

__version__ = "0.1.0"
