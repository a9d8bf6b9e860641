"""Task allocation for UAV swarms: KM matching, greedy and exhaustive baselines, clustering."""

__version__ = "0.1.0"