"""Gemini image tools: image generation and HTML rendering over JSON-RPC stdio"""

__version__ = "1.1.0"
