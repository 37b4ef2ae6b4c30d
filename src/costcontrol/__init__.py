"""costcontrol -- per-SIM operator configuration and settings synchronization."""

__version__ = '0.1.0'
