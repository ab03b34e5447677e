"""nepguard command line interface."""
