"""HealthSync — turn health-export payloads into daily metrics and trends."""

__version__ = "0.1.0"
