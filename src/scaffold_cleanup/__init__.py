"""Clean up freshly scaffolded Backstage plugin packages."""

__version__ = "0.1.0"
