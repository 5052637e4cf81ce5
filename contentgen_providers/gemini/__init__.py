"""Gemini / Vertex AI backend (``google-genai``).

``client`` imports the SDK; it is loaded lazily by the generator factory.
"""

from .response_mapping import response_from_google, usage_from_google

__all__ = ["response_from_google", "usage_from_google"]
