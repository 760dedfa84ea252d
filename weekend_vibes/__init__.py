"""
Weekend Vibes North events proxy.

A single HTTP endpoint that asks Gemini (with Google Search grounding) for
upcoming events in Northern Taiwan and returns the JSON array embedded in the
model's answer.
"""

__version__ = "0.1.0"
