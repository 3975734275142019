"""citylink — reachability queries over city adjacency matrices."""

__version__ = "0.1.0"
