"""Loading, validation and projection tooling for portal telemetry dashboard snapshots."""

__version__ = "0.1.0"
