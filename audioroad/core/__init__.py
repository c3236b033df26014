"""Cross-app primitives shared by the callers and calls APIs."""
