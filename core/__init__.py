"""
Kernmodule: Logging und Konfiguration.
"""
