"""Settings, logging, errors and shared infrastructure."""
