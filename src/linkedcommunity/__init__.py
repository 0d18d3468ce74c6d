"""LinkedCommunity — a small professional social network backend.

Users register, publish short posts, like each other's posts and
browse profiles. The REST API is consumed by a single-page frontend.
"""

__version__ = "0.1.0"
