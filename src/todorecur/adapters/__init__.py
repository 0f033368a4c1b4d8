"""Storage adapters implementing the repository ports."""
