"""hookchain command-line interface."""
