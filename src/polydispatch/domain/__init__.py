"""Domain layer - capabilities, variants, contexts and their state."""
