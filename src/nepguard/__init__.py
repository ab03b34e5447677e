"""nepguard - structural conformance checker for NEP-17 and NEP-11 token contracts."""

__version__ = "0.1.0"
