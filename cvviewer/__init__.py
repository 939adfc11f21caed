"""Image operators on NumPy arrays: colour conversions, filters, morphology, edge, border and region detection."""

__version__ = "0.1.0"