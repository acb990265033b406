"""Multi-node process scheduling simulator with clock barriers and message passing."""

__version__ = "0.1.0"