"""AF Home storefront checkout service."""
