"""Monte Carlo simulator for draws needed to assemble a combo."""

__version__ = "0.1.0"
