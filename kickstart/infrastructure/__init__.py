"""Infrastructure adapters: persistence, auditing and outbound email."""
