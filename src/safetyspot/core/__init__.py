"""Settings, database and error primitives."""
