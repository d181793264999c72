"""TurtleTrace: A-share position ledger, profit attribution and trading journal."""

__version__ = "0.1.0"
