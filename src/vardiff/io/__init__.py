"""File loaders for variable stores and recorded event streams."""
