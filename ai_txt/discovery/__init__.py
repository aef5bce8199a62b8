"""ai_txt.discovery: HTTP discovery of published ai.txt / ai.json documents."""

from ai_txt.discovery.cache import CacheEntry, PolicyCache
from ai_txt.discovery.client import AiTxtClient, discover_policy, is_secure_url

__all__ = ["AiTxtClient", "PolicyCache", "CacheEntry", "discover_policy", "is_secure_url"]
