"""Konfiguration: Schema, Standardwerte, Validierung, YAML-Verwaltung und Setup-Wizard."""
