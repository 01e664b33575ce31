"""Widget inbox API application package."""
