"""beadrope — pattern document engine for bead-rope crochet patterns."""

__version__ = "0.1.0"
