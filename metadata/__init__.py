"""Tag and format metadata readers."""
