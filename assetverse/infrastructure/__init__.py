"""Infrastructure layer: store clients, payment gateway, security."""
