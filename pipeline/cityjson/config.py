"""
CityJSON-Konfigurationsklasse.
"""

import logging
from typing import Dict, Any, Optional, List

from core.config_manager import load_config, get_module_config
from .solids import SUPPORTED_VERSIONS

class CityJSONConfigError(Exception):
    """Fehler bei der CityJSON-Konfiguration."""
    pass

class CityJSONConfig:
    """Konfigurationsklasse für das Schreiben und Lesen von CityJSON."""

    def __init__(self, config: Optional[Dict[str, Any]] = None, config_path: Optional[str] = None):
        """Initialisiert die CityJSON-Konfiguration.

        Args:
            config: Optional[Dict] - Direkte Konfiguration (Abschnitt 'cityjson' oder dessen Inhalt)
            config_path: Optional[str] - Pfad zur YAML-Konfigurationsdatei
        """
        self.logger = logging.getLogger(__name__)

        if config is not None:
            self.config = config.get('cityjson', config) or {}
            self.logger.info("✅ CityJSON-Konfiguration aus Dictionary geladen")
        elif config_path is not None:
            loaded = load_config(config_path)
            section = get_module_config(loaded, 'cityjson')
            # Dateien ohne Abschnitt enthalten die Einstellungen direkt
            self.config = (section if 'cityjson' in loaded else loaded) or {}
            self.logger.info(f"✅ CityJSON-Konfiguration geladen von: {config_path}")
        else:
            self.config = {}
            self.logger.debug("🔧 Keine Konfiguration übergeben, verwende Standardwerte")

    def validate(self) -> bool:
        """Validiert die Konfiguration.

        Returns:
            bool: True wenn die Konfiguration gültig ist
        """
        if str(self.version) not in SUPPORTED_VERSIONS:
            self.logger.warning(f"⚠️ Nicht unterstützte CityJSON-Version: {self.version}")
            return False

        if not isinstance(self.attribute_renames, dict):
            self.logger.warning("⚠️ Ungültige attribute_renames-Konfiguration")
            return False

        if not isinstance(self.identifier_attribute, str):
            self.logger.warning("⚠️ identifier_attribute muss ein String sein")
            return False

        offset = self.data_offset
        if not isinstance(offset, (list, tuple)) or len(offset) != 3:
            self.logger.warning("⚠️ data_offset braucht genau drei Werte")
            return False

        if not isinstance(self.metadata, dict):
            self.logger.warning("⚠️ Ungültige Metadaten-Konfiguration")
            return False

        return True

    @property
    def output_file(self) -> Optional[str]:
        """Gibt den Zielpfad der Ausgabedatei zurück."""
        return self.config.get('output_file')

    @property
    def identifier_attribute(self) -> str:
        """Gibt den Namen des ID-Attributs zurück (leer = generierte IDs)."""
        return self.config.get('identifier_attribute') or ''

    @property
    def attribute_renames(self) -> Dict[str, str]:
        """Gibt die Umbenennungstabelle für Gebäudeattribute zurück."""
        return self.config.get('attribute_renames') or {}

    @property
    def pretty_print(self) -> bool:
        """Gibt zurück ob das JSON eingerückt geschrieben wird."""
        return bool(self.config.get('pretty_print', False))

    @property
    def version(self) -> str:
        """Gibt die CityJSON-Version zurück."""
        return str(self.config.get('version', '1.1'))

    @property
    def composite_part_ids(self) -> bool:
        """Gibt zurück ob Part-IDs aus Gebäude-ID und Part-ID zusammengesetzt werden."""
        return bool(self.config.get('composite_part_ids', True))

    @property
    def data_offset(self) -> List[float]:
        """Gibt den Datenversatz zurück, der als translate geschrieben wird."""
        return self.config.get('data_offset') or [0.0, 0.0, 0.0]

    @property
    def metadata(self) -> Dict[str, Any]:
        """Gibt die Metadaten-Konfiguration zurück."""
        return self.config.get('metadata') or {}

    @property
    def read_lod(self) -> str:
        """Gibt die beim Lesen zu extrahierende LoD zurück."""
        return str((self.config.get('read') or {}).get('lod', '2.2'))
