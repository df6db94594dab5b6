"""External boundaries: database, vector store and provider adapters."""
