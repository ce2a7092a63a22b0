"""PyQt6 editor that renders the layout engine's placement store."""
