"""nodeforge - interactive scaffolding for Node.js/Express servers."""

__version__ = "0.1.0"
