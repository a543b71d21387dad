"""Service facades used by the inspector window."""
