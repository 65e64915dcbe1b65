"""Per-language scaffold generators: pure functions from options to {path: content}."""
