from __future__ import annotations

import json
import logging
import math
import warnings
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Literal, Mapping

from polymorph.validation import ConfigError, validate_color, validate_ordered, validate_range

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".polymorph"
CONFIG_FILE = CONFIG_DIR / "polymorph.cfg"
DEFAULT_CANVAS_SIZE = (600, 600)

ParameterKind = Literal["int", "float", "bool", "color"]


@dataclass(frozen=True)
class ParameterSpec:
    """Type and optional numeric range/step of one tweakable parameter."""

    kind: ParameterKind
    minimum: float | None = None
    maximum: float | None = None
    step: float | None = None
    alias: str | None = None
    help: str = ""


PARAMETER_SPECS: Dict[str, ParameterSpec] = {
    "interval": ParameterSpec("int", 100, 20000, 100, "interval", "Milliseconds between new target shapes."),
    "morph_speed": ParameterSpec("float", 0.01, 2.0, 0.01, "morphSpeed", "Progress added per tick."),
    "num_shapes": ParameterSpec("int", 1, 20, 1, "numShapes", "Maximum shapes per set."),
    "min_vertices": ParameterSpec("int", 3, 32, 1, "minVertices", "Fewest vertices per shape."),
    "max_vertices": ParameterSpec("int", 3, 32, 1, "maxVertices", "Most vertices per shape."),
    "min_size": ParameterSpec("float", 10, 400, 1, "minSize", "Smallest base size."),
    "max_size": ParameterSpec("float", 10, 400, 1, "maxSize", "Largest base size."),
    "stroke_weight": ParameterSpec("float", 0.5, 20, 0.5, "strokeWeight", "Outline width."),
    "key_color": ParameterSpec("color", alias="keyColor", help="Fill/outline color."),
    "vertex_color": ParameterSpec("color", alias="vertexColor", help="Vertex marker color."),
    "vertex_size": ParameterSpec("float", 1, 30, 1, "vertexSize", "Vertex marker diameter."),
    "show_vertices": ParameterSpec("bool", alias="showVertices", help="Mark vertices when not cycling."),
    "outline_only": ParameterSpec("bool", alias="outlineOnly", help="Outline styling when not cycling."),
    "cycle_draw_mode": ParameterSpec("bool", alias="cycleDrawMode", help="Cycle draw modes on each new target."),
    "current_draw_mode": ParameterSpec("int", 0, 2, 1, "currentDrawMode", "Active draw mode (0-2)."),
}

_ALIASES = {spec.alias: name for name, spec in PARAMETER_SPECS.items() if spec.alias}


def canonical_name(name: str) -> str:
    """Resolve a snake_case or camelCase parameter name."""

    key = name.strip()
    if key in PARAMETER_SPECS:
        return key
    resolved = _ALIASES.get(key)
    if resolved is None:
        raise ConfigError(f"Unknown parameter {name!r}.")
    return resolved


def _coerce(name: str, value: Any) -> Any:
    spec = PARAMETER_SPECS[name]
    if spec.kind == "color":
        return validate_color(name, value)
    if spec.kind == "bool":
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in {"true", "false", "1", "0", "yes", "no"}:
            return value.strip().lower() in {"true", "1", "yes"}
        raise ConfigError(f"{name} must be true or false.")
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be a number.")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be a number.") from exc
    if spec.kind == "int":
        if not math.isfinite(number) or not number.is_integer():
            raise ConfigError(f"{name} must be a whole number.")
        number = int(number)
    validate_range(name, number, spec.minimum, spec.maximum)
    return number


def _snap(name: str, value: float) -> float:
    spec = PARAMETER_SPECS[name]
    if spec.step is None or spec.kind != "float":
        return value
    base = spec.minimum or 0.0
    snapped = round(base + round((value - base) / spec.step) * spec.step, 10)
    if abs(snapped - value) > 1e-9:
        warnings.warn(f"{name} {value:g} snapped to step {spec.step:g} -> {snapped:g}.", RuntimeWarning)
    return snapped


@dataclass
class MorphParameters:
    """Live, externally editable parameter set read by the engine every tick."""

    interval: int = 2000
    morph_speed: float = 0.08
    num_shapes: int = 4
    min_vertices: int = 3
    max_vertices: int = 9
    min_size: float = 150.0
    max_size: float = 180.0
    stroke_weight: float = 2.0
    key_color: str = "#4C74B9"
    vertex_color: str = "#FFFFFF"
    vertex_size: float = 6.0
    show_vertices: bool = False
    outline_only: bool = False
    cycle_draw_mode: bool = True
    current_draw_mode: int = 0

    def validate(self) -> "MorphParameters":
        for item in fields(self):
            _coerce(item.name, getattr(self, item.name))
        validate_ordered("min_vertices", self.min_vertices, "max_vertices", self.max_vertices)
        validate_ordered("min_size", self.min_size, "max_size", self.max_size)
        return self

    def set(self, name: str, value: Any) -> None:
        """Coerce, range-check and snap a single value, then apply it."""

        self.update(**{name: value})

    def update(self, **values: Any) -> None:
        """Apply several values at once; nothing changes if any is rejected."""

        staged = self.as_dict()
        for raw_name, value in values.items():
            name = canonical_name(raw_name)
            coerced = _coerce(name, value)
            if PARAMETER_SPECS[name].kind == "float":
                coerced = _snap(name, coerced)
            staged[name] = coerced
        candidate = MorphParameters(**staged).validate()
        for item in fields(self):
            setattr(self, item.name, getattr(candidate, item.name))
        logger.debug("Parameters updated: %s", ", ".join(sorted(values)))

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "MorphParameters":
        params = cls()
        values = {key: value for key, value in mapping.items() if not str(key).startswith("_")}
        if values:
            params.update(**values)
        return params


DEFAULT_CONFIG: Dict[str, Any] = {
    "_comment": "Polymorph parameters. Edit while a preview runs to retune it live.",
    **MorphParameters().as_dict(),
}


def ensure_user_config(path: Path | None = None) -> None:
    """Ensure the parameter file exists with sane defaults."""

    target = path or CONFIG_FILE
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        return

    if target.exists():
        return

    try:
        target.write_text(json.dumps(DEFAULT_CONFIG, indent=2) + "\n")
    except OSError:
        return


def _load_user_config(path: Path | None = None) -> Dict[str, Any]:
    ensure_user_config(path)
    try:
        raw = json.loads((path or CONFIG_FILE).read_text())
    except (OSError, json.JSONDecodeError):
        return DEFAULT_CONFIG.copy()
    if not isinstance(raw, dict):
        return DEFAULT_CONFIG.copy()
    return raw


def load_parameters(path: Path | None = None) -> MorphParameters:
    """Return parameters from the user config, falling back to defaults if unreadable.

    Readable files with invalid values still raise ``ConfigError``.
    """

    return MorphParameters.from_mapping(_load_user_config(path))


def read_parameters(path: Path) -> MorphParameters:
    """Strictly parse a parameter file, raising ``ConfigError`` on any problem."""

    try:
        raw = json.loads(Path(path).read_text())
    except OSError as exc:
        raise ConfigError(f"Unable to read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a JSON object.")
    return MorphParameters.from_mapping(raw)
