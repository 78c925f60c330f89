"""AssetVerse: corporate asset lifecycle backend (inventory, requests, assignments, subscriptions)."""
