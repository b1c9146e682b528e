"""
Command-line entry points for the signal engine.

Provides command-line interfaces for:
- Strategy replay over historical bars
"""
