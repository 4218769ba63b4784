"""Configuration: settings, logging and static lookup tables."""
