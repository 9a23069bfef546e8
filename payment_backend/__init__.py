"""Mock payment backend for local storefront development."""
