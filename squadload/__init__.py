"""squadload — athlete workload analytics and training-group engine."""

__version__ = "0.1.0"
