from .json_store import PinStore, PinStoreError

__all__ = ["PinStore", "PinStoreError"]
