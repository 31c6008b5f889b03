"""Console entrypoint, composition root and command parser."""
