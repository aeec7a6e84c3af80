"""External collaborators: database, record store, completion API."""
