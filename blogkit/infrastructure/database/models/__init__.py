from .blog import BlogPostModel, PostTagModel, TagModel

__all__ = [
    "BlogPostModel",
    "PostTagModel",
    "TagModel",
]
