"""
security/ - Handler middleware (guild whitelist, rate limiting).
"""
