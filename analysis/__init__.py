"""Analyse fertiger Meeting-Pläne: Validierung, Auslastung, Diff."""
