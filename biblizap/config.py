"""Configuration management.

``Settings`` is a **metaclass-based singleton**: the first call to
``Settings.load()`` creates the instance; every later call returns
the same object.  Use ``update()`` to change values at runtime, or
``reload()`` to re-read everything from disk.

User-editable configuration lives in ``.metadata/settings.yaml``.
On first run, missing files are copied from ``.metadata.example/``.
"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from biblizap.engine.filters import AbsentFieldPolicy
from biblizap.engine.paginator import PAGE_SIZES, WINDOW_RADIUS

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Singleton metaclass
# ---------------------------------------------------------------------------

class _SettingsMeta(type):
    """Metaclass that enforces a process-wide singleton for *Settings*.

    * First ``Settings(...)`` creates and caches the instance.
    * Later ``Settings(...)`` calls return the cached instance (args ignored).
    """

    _instances: dict[type, Any] = {}

    def __call__(cls, *args: Any, **kwargs: Any) -> Any:
        if cls not in cls._instances:
            cls._instances[cls] = super().__call__(*args, **kwargs)
        return cls._instances[cls]


# ---------------------------------------------------------------------------
# Settings dataclass (singleton)
# ---------------------------------------------------------------------------

@dataclass
class Settings(metaclass=_SettingsMeta):
    """Application settings: a singleton with runtime-mutable values.

    Usage::

        settings = Settings.load()               # first call → create
        settings = Settings.load()               # later → same object
        settings.update(export_dir=Path(...))    # runtime change
        settings = Settings.reload()             # re-read from disk
    """

    product_name: str = "BibliZap"
    metadata_dir: Path = Path(".metadata")
    export_dir: Path = Path("exports")
    page_sizes: list[int] = field(default_factory=lambda: list(PAGE_SIZES))
    default_page_size: int = PAGE_SIZES[0]
    window_radius: int = WINDOW_RADIUS
    absent_field_policy: AbsentFieldPolicy = AbsentFieldPolicy.EXCLUDE
    log_level: str = "INFO"

    # ── Runtime helpers ───────────────────────────────────────────────

    def update(self, **kwargs: Any) -> None:
        """Mutate settings fields at runtime.

        >>> Settings.load().update(export_dir=Path("/tmp/exports"))
        """
        for key, value in kwargs.items():
            if not hasattr(self, key):
                raise AttributeError(f"Settings has no field '{key}'")
            setattr(self, key, value)

    # ── Factory / lifecycle ───────────────────────────────────────────

    @classmethod
    def load(cls, base_dir: Optional[Path] = None) -> "Settings":
        """Load or return the singleton Settings instance.

        On first call the singleton is created; subsequent calls return
        the cached instance.  Pass *base_dir* to override the project
        root (defaults to the repository root one level above ``biblizap/``).
        """
        if cls in _SettingsMeta._instances:
            return _SettingsMeta._instances[cls]  # type: ignore[return-value]

        if base_dir is None:
            base_dir = Path(__file__).resolve().parent.parent

        metadata_dir = base_dir / ".metadata"
        cls._ensure_default_files(base_dir, metadata_dir)

        data = _load_yaml(metadata_dir / "settings.yaml")
        return cls(
            metadata_dir=metadata_dir,
            export_dir=base_dir / str(data.get("export_dir") or "exports"),
            **_parse_settings(data),
        )

    @classmethod
    def reload(cls, base_dir: Optional[Path] = None) -> "Settings":
        """Discard the current singleton and re-load from disk."""
        cls.reset()
        return cls.load(base_dir)

    @classmethod
    def reset(cls) -> None:
        """Discard the singleton so the next ``load()`` re-creates it."""
        _SettingsMeta._instances.pop(cls, None)

    # ── Private ───────────────────────────────────────────────────────

    @staticmethod
    def _ensure_default_files(base_dir: Path, metadata_dir: Path) -> None:
        """Copy ``.metadata.example/`` templates when real files are missing."""
        metadata_dir.mkdir(parents=True, exist_ok=True)

        example_dir = base_dir / ".metadata.example"
        if not example_dir.exists():
            return

        for example_file in example_dir.iterdir():
            if example_file.is_file():
                target = metadata_dir / example_file.name
                if not target.exists():
                    shutil.copy2(example_file, target)
                    logger.info("Created .metadata/%s from template", example_file.name)


# ---------------------------------------------------------------------------
# YAML loaders
# ---------------------------------------------------------------------------

def _load_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML mapping; anything unreadable counts as empty."""
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable %s: %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}


def _parse_settings(data: dict[str, Any]) -> dict[str, Any]:
    """Validate raw YAML values; invalid entries fall back to defaults."""
    values: dict[str, Any] = {}

    name = data.get("product_name")
    if isinstance(name, str) and name.strip():
        values["product_name"] = name.strip()

    sizes = data.get("page_sizes")
    if isinstance(sizes, list) and sizes and all(isinstance(s, int) and s > 0 for s in sizes):
        values["page_sizes"] = sorted(set(sizes))
    page_sizes = values.get("page_sizes", list(PAGE_SIZES))

    default_size = data.get("default_page_size")
    if default_size in page_sizes:
        values["default_page_size"] = default_size
    else:
        values["default_page_size"] = page_sizes[0]

    radius = data.get("window_radius")
    if isinstance(radius, int) and radius >= 0:
        values["window_radius"] = radius

    policy = data.get("absent_field_policy")
    if policy is not None:
        try:
            values["absent_field_policy"] = AbsentFieldPolicy(str(policy).lower())
        except ValueError:
            logger.warning("Unknown absent_field_policy %r, using 'exclude'", policy)

    level = data.get("log_level")
    if isinstance(level, str) and level.strip():
        values["log_level"] = level.strip().upper()

    return values


def save_settings(path: Path, settings: Settings) -> None:
    """Persist the user-editable part of *settings* to ``settings.yaml``."""
    data: dict[str, Any] = {
        "product_name": settings.product_name,
        "export_dir": _export_dir_setting(settings),
        "page_sizes": list(settings.page_sizes),
        "default_page_size": settings.default_page_size,
        "window_radius": settings.window_radius,
        "absent_field_policy": settings.absent_field_policy.value,
        "log_level": settings.log_level,
    }
    with open(path, "w", encoding="utf-8") as f:
        f.write("# BibliZap results view settings\n")
        yaml.dump(
            data,
            f,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )


def _export_dir_setting(settings: Settings) -> str:
    """Export directory as written to YAML: relative to the project root
    when it lies inside it, the full path otherwise."""
    base_dir = settings.metadata_dir.parent
    try:
        return settings.export_dir.relative_to(base_dir).as_posix()
    except ValueError:
        return str(settings.export_dir)
