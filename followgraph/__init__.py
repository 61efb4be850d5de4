"""Follow-relationship backend."""
