"""partnerdesk: partner receivables, collections and wallet back office."""

__version__ = "0.1.0"
