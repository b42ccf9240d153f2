"""Console utilities."""
