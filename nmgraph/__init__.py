"""nmgraph - installed node_modules dependency graph analyzer."""

__version__ = "0.1.0"
