"""gopub - publish generated Go modules by committing and tagging their repository."""

__version__ = "0.1.0"
