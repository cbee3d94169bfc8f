"""idef0-svg: render IDEF0 process diagrams from plain-text statements."""

__version__ = "0.1.0"
