"""Invoice lifecycle rules."""
