"""API schemas (request/response models, camelCase on the wire)."""
