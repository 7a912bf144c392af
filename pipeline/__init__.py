"""
Verarbeitungspipeline des CityJSON-Codecs.
"""
