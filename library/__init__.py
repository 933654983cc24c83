"""Local music library scanning."""
