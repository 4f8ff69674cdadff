"""Static configuration for meterbill."""
