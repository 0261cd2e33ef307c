"""Exceptions raised by the external-service clients."""


class PersistenceError(Exception):
    """Custom exception for document database failures."""

    pass


class AssetStoreError(Exception):
    """Custom exception for asset upload/delete failures."""

    pass
