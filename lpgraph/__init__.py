"""
lpgraph
=======
Graph preparation for semi-supervised label propagation: assembles edge and
seed records into a weighted graph, applies reweighting and pruning, and
derives the per-vertex random-walk transition model.

Version: 1.0.0
"""

__version__ = "1.0.0"
