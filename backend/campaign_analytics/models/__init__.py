# Domain records held by the in-memory campaign store
from .post import Post
from .campaign import Campaign

__all__ = ["Post", "Campaign"]
