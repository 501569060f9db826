"""IO adapters: HTTP, filesystem and payload validation."""
