"""Teacher records management backend."""
