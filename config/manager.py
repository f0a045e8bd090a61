"""Konfigurationsmanager: Laden, Speichern und Szenarien.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError, field_validator
from rich.console import Console
from rich.prompt import Confirm
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.schema import RosterConfig
from solver.enumerator import monthly_capacity

logger = logging.getLogger(__name__)
console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


# ─── YAML-KOMMENTAR-AUFBAU ───

_YAML_HEADER = f"""\
# ============================================
# Meeting-Planer — Konfiguration
# Version: 1.0
# Erstellt: {date.today().isoformat()}
# ============================================
"""

_SECTION_COMMENTS = {
    "parameters": (
        "Planungsparameter",
        "Standardwerte für 'python main.py schedule' ohne Optionen.\n"
        "Meetings finden Mo–Fr statt und enden spätestens zu end_hour.",
    ),
    "output": ("Ausgabe", None),
}

# Zeilenkommentare hinter einzelnen Parametern
_PARAMETER_HINTS = {
    "total_employees": "Mitarbeiter 1..N werden der Reihe nach eingeplant",
    "employees_per_meeting": "nur das letzte Meeting darf kleiner sein",
    "start_hour": "volle Stunde, 0–23",
    "end_hour": "volle Stunde, start_hour–23",
}


def _read_yaml(path: Path):
    with open(path, "r", encoding="utf-8") as f:
        return yaml.load(f)


def _commented_config(config: RosterConfig) -> CommentedMap:
    """Baut die YAML-Struktur mit Abschnitts- und Zeilenkommentaren auf."""
    cm = CommentedMap(json.loads(config.model_dump_json()))
    for field, (label, comment) in _SECTION_COMMENTS.items():
        cm.yaml_set_comment_before_after_key(
            field,
            before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
        )
    params = CommentedMap(cm["parameters"])
    for key, hint in _PARAMETER_HINTS.items():
        params.yaml_add_eol_comment(hint, key)
    cm["parameters"] = params
    return cm


class ScenarioMeta(BaseModel):
    """Kopfdaten eines gespeicherten Szenarios (liegt neben der YAML-Datei)."""
    name: str
    description: str = ""
    created: str = ""
    # Planungsmonat, z.B. "10/2024"
    month: str
    total_employees: int
    employees_per_meeting: int
    room_count: int
    # Mitarbeiter, die im Monat maximal eingeplant werden können
    capacity: int

    @field_validator("created", mode="before")
    @classmethod
    def _date_as_text(cls, v):
        # YAML liest unquotierte ISO-Daten als date
        return v.isoformat() if isinstance(v, date) else v

    @classmethod
    def from_config(cls, name: str, config: RosterConfig,
                    description: str = "", created: str = "") -> "ScenarioMeta":
        p = config.parameters
        return cls(
            name=name,
            description=description,
            created=created,
            month=p.label(),
            total_employees=p.total_employees,
            employees_per_meeting=p.employees_per_meeting,
            room_count=p.room_count,
            capacity=monthly_capacity(p),
        )

    @property
    def fits(self) -> bool:
        """Reicht die Monatskapazität für alle Mitarbeiter?"""
        return self.capacity >= self.total_employees


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "roster_config.yaml"
    SCENARIOS_DIR = Path("scenarios")

    def first_run_check(self) -> bool:
        """Gibt True zurück wenn noch keine Config existiert (Erstaufruf)."""
        return not self.DEFAULT_CONFIG.exists()

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> RosterConfig:
        """Lade Config aus YAML. Validiert automatisch via Pydantic."""
        target = path or self.DEFAULT_CONFIG
        if not target.exists():
            raise FileNotFoundError(
                f"Konfigurationsdatei nicht gefunden: {target}\n"
                f"Führen Sie 'python main.py setup' aus, um die Konfiguration anzulegen."
            )
        raw = _read_yaml(target)
        if raw is None:
            raise ValueError(f"Konfigurationsdatei ist leer: {target}")
        try:
            return RosterConfig.model_validate(dict(raw))
        except ValidationError as e:
            fields = ", ".join(
                ".".join(str(part) for part in err["loc"]) for err in e.errors()
            )
            raise ValueError(
                f"Konfigurationsdatei ungültig: {target}\n"
                f"Betroffene Felder: {fields}\n"
                f"Pydantic-Fehler: {e}"
            ) from e

    # ─── Speichern ───

    def save(self, config: RosterConfig, path: Optional[Path] = None) -> None:
        """Speichere Config als YAML mit deutschen Kommentaren."""
        target = path or self.DEFAULT_CONFIG
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(_commented_config(config), f)
        console.print(f"[green]✓[/green] Konfiguration gespeichert: {target}")

    # ─── Szenarien ───
    # Jedes Szenario besteht aus <name>.yaml (Config) und <name>.meta.yaml
    # (ScenarioMeta). Fehlt die Meta-Datei, wird sie aus der Config abgeleitet.

    def _scenario_paths(self, name: str) -> tuple[Path, Path]:
        if not name or name.startswith(".") or "/" in name or "\\" in name:
            raise ValueError(f"Ungültiger Szenario-Name: {name!r}")
        return (self.SCENARIOS_DIR / f"{name}.yaml",
                self.SCENARIOS_DIR / f"{name}.meta.yaml")

    def save_scenario(self, config: RosterConfig, name: str,
                      description: str = "") -> Optional[ScenarioMeta]:
        """Speichert eine Config als benanntes Szenario.

        Returns:
            Die geschriebenen Kopfdaten, oder None wenn der Nutzer das
            Überschreiben ablehnt.
        """
        config_path, meta_path = self._scenario_paths(name)
        if config_path.exists() and not Confirm.ask(
            f"Szenario '{name}' existiert bereits. Überschreiben?", default=False
        ):
            console.print("[yellow]Abgebrochen.[/yellow]")
            return None
        self.save(config, config_path)
        meta = ScenarioMeta.from_config(
            name, config, description=description, created=date.today().isoformat(),
        )
        with open(meta_path, "w", encoding="utf-8") as f:
            yaml.dump(meta.model_dump(), f)
        console.print(
            f"[green]✓[/green] Szenario '{name}' gespeichert "
            f"({meta.month}, {meta.total_employees} Mitarbeiter)."
        )
        return meta

    def scenario_meta(self, name: str) -> ScenarioMeta:
        """Kopfdaten eines Szenarios; ohne Meta-Datei aus der Config berechnet."""
        config_path, meta_path = self._scenario_paths(name)
        raw = _read_yaml(meta_path) if meta_path.exists() else None
        if raw is not None:
            try:
                return ScenarioMeta.model_validate(dict(raw))
            except ValidationError:
                logger.warning("Meta-Datei unvollständig, wird neu berechnet: %s", meta_path)
        return ScenarioMeta.from_config(name, self.load(config_path))

    def list_scenarios(self) -> list[ScenarioMeta]:
        """Listet alle gespeicherten Szenarien auf, sortiert nach Name."""
        if not self.SCENARIOS_DIR.exists():
            return []
        names = sorted(
            p.stem for p in self.SCENARIOS_DIR.glob("*.yaml")
            if not p.stem.endswith(".meta")
        )
        return [self.scenario_meta(n) for n in names]

    def load_scenario(self, name: str) -> RosterConfig:
        """Lädt ein gespeichertes Szenario."""
        config_path, _ = self._scenario_paths(name)
        if not config_path.exists():
            available = [s.name for s in self.list_scenarios()]
            raise FileNotFoundError(
                f"Szenario '{name}' nicht gefunden. Verfügbar: {available}"
            )
        return self.load(config_path)
