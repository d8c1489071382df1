from .correlation import PendingRequest, PendingRequests

__all__ = ["PendingRequest", "PendingRequests"]
