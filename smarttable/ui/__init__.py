"""PyQt5 presentation layer."""
