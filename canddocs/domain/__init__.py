"""Domain layer: candidate documents, import errors and the rules that tie them together."""
