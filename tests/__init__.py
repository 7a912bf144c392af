"""
Test-Suite für den CityJSON-Codec.

Dieses Paket enthält Unit-Tests und Integrationstests für Schreib- und
Lesepfad.
"""

import os
import sys

# Füge das Hauptverzeichnis zum Python-Pfad hinzu
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
