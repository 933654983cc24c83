"""Media probing, artwork and quality helpers."""
