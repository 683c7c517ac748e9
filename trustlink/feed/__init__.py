"""Posts and the feed."""

from trustlink.feed.models import CreatePostBody, Post, PostList
from trustlink.feed.service import FeedService, InvalidPostError

__all__ = ["CreatePostBody", "FeedService", "InvalidPostError", "Post", "PostList"]
