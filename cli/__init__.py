"""
Kommandozeilenwerkzeuge.
"""
