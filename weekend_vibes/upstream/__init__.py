"""
Upstream generative search collaborators.
"""

from weekend_vibes.upstream.gemini_search import GeminiSearchClient, UpstreamClient

__all__ = ["GeminiSearchClient", "UpstreamClient"]
