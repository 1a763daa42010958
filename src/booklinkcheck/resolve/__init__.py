"""Link classification, path resolution and heading anchors."""

from booklinkcheck.resolve.resolver import Resolver, split_target
from booklinkcheck.resolve.slugs import normalize_id, page_anchors, unique_slugs

__all__ = ["Resolver", "normalize_id", "page_anchors", "split_target", "unique_slugs"]
