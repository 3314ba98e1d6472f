"""Safety Spot activity reporting backend."""
