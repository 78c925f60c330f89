"""Application layer: use cases, access policy, ports, and commands."""
