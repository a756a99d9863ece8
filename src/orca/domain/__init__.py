"""Domain model of the namespace tree and its errors."""
