"""Package data: built-in mapper profiles."""
