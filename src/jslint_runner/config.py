from __future__ import annotations

import copy
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from . import jsonc

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".jslintrc"
PACKAGE_FILENAME = "package.json"
PACKAGE_CONFIG_KEY = "jslintConfig"
GLOBALS_KEYS = ("globals", "predef")

PACKAGE_DIR = Path(__file__).resolve().parent

DEFAULT_NODE = "node"
DEFAULT_SCRIPT = Path("scripts") / "jslint.js"
PLUGIN_DIR_ENV = "JSLINT_RUNNER_PLUGIN_DIR"
SCRIPT_ENV = "JSLINT_RUNNER_SCRIPT"
NODE_ENV = "JSLINT_RUNNER_NODE"


def _is_true(value: Any) -> bool:
    return value is True or value == "true"


def _normalize_globals(value: Any) -> dict[str, Any]:
    if isinstance(value, list):
        return {str(name): True for name in value}
    if isinstance(value, dict):
        return dict(value)
    return {}


def _resolve_path(base_dir: Path, value: str) -> Path:
    path = Path(value)
    return path if path.is_absolute() else base_dir / path


def merge_config(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``override`` written over it.

    Global tables are merged per identifier; every other key is replaced.
    Neither argument is modified.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if key in GLOBALS_KEYS:
            table = _normalize_globals(merged.get(key))
            table.update(_normalize_globals(value))
            merged[key] = table
        else:
            merged[key] = copy.deepcopy(value)
    return merged


@dataclass(frozen=True)
class LintConfig:
    options: dict[str, Any] = field(default_factory=dict)
    globals: dict[str, bool] = field(default_factory=dict)

    def merged(self, override: "LintConfig") -> "LintConfig":
        return LintConfig(
            options={**self.options, **override.options},
            globals={**self.globals, **override.globals},
        )

    def global_names(self) -> list[str]:
        return list(self.globals)

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "LintConfig":
        options: dict[str, Any] = {}
        globals_: dict[str, bool] = {}
        for key, value in data.items():
            if key in GLOBALS_KEYS:
                # A list declares assignable names; a mapping carries the flag per name.
                if isinstance(value, list):
                    for name in value:
                        globals_[str(name)] = True
                elif isinstance(value, dict):
                    for name, flag in value.items():
                        globals_[name] = _is_true(flag)
            elif isinstance(value, str) and value in ("true", "false"):
                options[key] = value == "true"
            else:
                options[key] = value
        return LintConfig(options=options, globals=globals_)


@dataclass(frozen=True)
class RunnerSettings:
    plugin_dir: Path
    jslint_script: Path
    node: str

    @staticmethod
    def load(
        plugin_dir: str | None = None,
        jslint_script: str | None = None,
        node: str | None = None,
        environ: Mapping[str, str] | None = None,
        base_dir: Path | None = None,
    ) -> "RunnerSettings":
        env = os.environ if environ is None else environ
        base = base_dir or Path.cwd()
        plugin_value = plugin_dir or env.get(PLUGIN_DIR_ENV)
        # Without an override the plugin is the installed package itself.
        plugin = _resolve_path(base, plugin_value) if plugin_value else PACKAGE_DIR
        script_value = jslint_script or env.get(SCRIPT_ENV)
        script = _resolve_path(base, script_value) if script_value else plugin / DEFAULT_SCRIPT
        return RunnerSettings(
            plugin_dir=plugin,
            jslint_script=script,
            node=node or env.get(NODE_ENV) or DEFAULT_NODE,
        )


def _read_json(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError:
        logger.warning("Could not parse JSON at: %s", path)
        return {}
    try:
        data = jsonc.loads(text)
    except ValueError:
        logger.warning("Could not parse JSON at: %s", path)
        return {}
    if not isinstance(data, dict):
        logger.warning("Could not parse JSON at: %s", path)
        return {}
    return data


def _apply_extends(data: dict[str, Any], path: Path, chain: tuple[Path, ...]) -> dict[str, Any]:
    local = dict(data)
    extends = local.pop("extends", None)
    if extends is None:
        return local
    if not isinstance(extends, str):
        logger.warning("Ignoring non-string extends in %s", path)
        return local
    base_path = _resolve_path(path.parent, extends).resolve()
    chain = chain + (path.resolve(),)
    if base_path in chain:
        logger.warning("Circular extends at: %s", base_path)
        base: dict[str, Any] = {}
    else:
        base = _load_chain(base_path, chain)
        if base is None:
            logger.warning("Could not parse JSON at: %s", base_path)
            base = {}
    return merge_config(base, local)


def _load_chain(path: Path, chain: tuple[Path, ...]) -> dict[str, Any] | None:
    data = _read_json(path)
    if data is None:
        return None
    return _apply_extends(data, path, chain)


def load_config_file(path: Path) -> dict[str, Any] | None:
    """Load a ``.jslintrc`` and its ``extends`` chain.

    Returns ``None`` when the file does not exist and ``{}`` when it cannot be
    read or parsed.
    """
    return _load_chain(path, ())


def load_package_config(path: Path) -> dict[str, Any] | None:
    package = _read_json(path)
    if not package:
        return None
    config = package.get(PACKAGE_CONFIG_KEY)
    if not isinstance(config, dict):
        return None
    return _apply_extends(config, path, ())


def home_directory(environ: Mapping[str, str] | None = None) -> Path | None:
    env = os.environ if environ is None else environ
    if env.get("HOME"):
        return Path(env["HOME"])
    drive = env.get("HOMEDRIVE")
    home_path = env.get("HOMEPATH")
    if drive and home_path:
        return Path(drive + home_path)
    if env.get("USERPROFILE"):
        return Path(env["USERPROFILE"])
    return None


def search_paths(source_dir: Path, home: Path | None) -> list[Path]:
    start = source_dir.resolve()
    paths = [start, *start.parents]
    if home is not None:
        paths.append(home)
    return paths


def find_config(paths: list[Path]) -> dict[str, Any] | None:
    for directory in paths:
        config = load_config_file(directory / CONFIG_FILENAME)
        if config is not None:
            logger.debug("Using %s", directory / CONFIG_FILENAME)
            return config
        config = load_package_config(directory / PACKAGE_FILENAME)
        if config is not None:
            logger.debug("Using %s from %s", PACKAGE_CONFIG_KEY, directory / PACKAGE_FILENAME)
            return config
    return None


def resolve_config(
    source_dir: Path,
    plugin_dir: Path,
    environ: Mapping[str, str] | None = None,
) -> LintConfig:
    config = LintConfig()
    baseline = load_config_file(plugin_dir / CONFIG_FILENAME)
    if baseline is not None:
        config = config.merged(LintConfig.from_dict(baseline))
    found = find_config(search_paths(source_dir, home_directory(environ)))
    if found is not None:
        config = config.merged(LintConfig.from_dict(found))
    return config
