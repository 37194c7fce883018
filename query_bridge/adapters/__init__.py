"""Remote table store adapters."""
