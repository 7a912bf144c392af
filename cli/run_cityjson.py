"""
CLI-Schnittstelle zum Extrahieren der Flächen einer LoD aus CityJSON-Dateien.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from core.logging_config import setup_logging
from pipeline.cityjson import CityJSONConfig, CityJSONError, DocumentAssembler, fetch_cityjson_faces

# Logger-Konfiguration
setup_logging()
logger = logging.getLogger(__name__)

class CityJSONProcessingError(Exception):
    """Fehler bei der CityJSON-Verarbeitung über die CLI."""
    def __init__(self, message: str, details: Optional[Exception] = None):
        self.message = message
        self.details = details
        super().__init__(f"{message}" + (f": {str(details)}" if details else ""))

@click.command()
@click.argument('input_file', type=click.Path())
@click.option('--config', '-c', default=None, help='Pfad zur Konfigurationsdatei')
@click.option('--lod', '-l', default=None, help='Zu extrahierende LoD (Standard aus Konfiguration)')
@click.option('--output-dir', '-o', default=None, help='Verzeichnis für faces.gpkg')
@click.option('--crs', default=None, help='Koordinatensystem der Ausgabe, z.B. EPSG:7415')
def run_cityjson(input_file: str, config: Optional[str], lod: Optional[str],
                 output_dir: Optional[str], crs: Optional[str]):
    """Extrahiert die Flächen einer LoD aus einer CityJSON-Datei."""
    try:
        input_path = Path(input_file)
        if not input_path.exists():
            raise CityJSONProcessingError(f"CityJSON-Datei nicht gefunden: {input_path}")

        try:
            cityjson_config = CityJSONConfig(config_path=config) if config else CityJSONConfig()
            assembler = DocumentAssembler(cityjson_config)
        except Exception as e:
            raise CityJSONProcessingError("Fehler beim Laden der Konfiguration", e)

        lod = lod or cityjson_config.read_lod
        logger.info(f"🚀 Extrahiere LoD {lod} aus {input_path}")
        try:
            faces = fetch_cityjson_faces(input_path, lod, output_dir=output_dir, crs=crs, assembler=assembler)
        except CityJSONError as e:
            raise CityJSONProcessingError("Fehler beim Lesen der CityJSON-Datei", e)

        logger.info(f"✅ {len(faces)} Flächen in LoD {lod} extrahiert")
        for name, count in faces['surface_name'].value_counts().items():
            logger.info(f"   {name}: {count}")

    except CityJSONProcessingError as e:
        logger.error(f"❌ CityJSON-Verarbeitung mit Fehlern beendet: {e.message}")
        if e.details:
            logger.debug(f"Details: {str(e.details)}")
        raise click.Abort()

if __name__ == "__main__":
    run_cityjson()
