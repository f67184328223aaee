"""roomdir — room alias directory for a federated messaging homeserver."""

__version__ = "0.1.0"
