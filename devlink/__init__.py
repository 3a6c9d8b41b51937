"""devlink: accounts, profiles and connection requests between developers."""

__version__ = "0.1.0"
