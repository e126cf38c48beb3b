"""Process Analyzer — rule-based host and process telemetry analysis."""

__version__ = "1.0.0"
