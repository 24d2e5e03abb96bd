"""University matching and discovery feature package."""
