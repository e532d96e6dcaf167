"""Loading and validation of the optional YAML configuration file."""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from sixpair.core.errors import ConfigLoadError, ConfigValidationError
from sixpair.core.model import PairingProtocol, USBDeviceId
from sixpair.core.registry import lookup_known_device

CONFIG_ENV_VAR = "SIXPAIR_CONFIG"
LOGGER = logging.getLogger(__name__)


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate mapping keys."""


UniqueKeyLoader.yaml_implicit_resolvers = {
    key: list(value) for key, value in yaml.SafeLoader.yaml_implicit_resolvers.items()
}

for first_char, mappings in list(UniqueKeyLoader.yaml_implicit_resolvers.items()):
    UniqueKeyLoader.yaml_implicit_resolvers[first_char] = [
        (tag, regexp)
        for tag, regexp in mappings
        if tag != "tag:yaml.org,2002:bool"
    ]

# YAML 1.2 booleans only: yes/no/on/off stay strings.
UniqueKeyLoader.add_implicit_resolver(
    "tag:yaml.org,2002:bool",
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise ConfigValidationError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


@dataclass(frozen=True)
class SixpairConfig:
    device: USBDeviceId | None = None
    protocol: PairingProtocol | None = None
    verify: bool = True
    show_serial: bool = False
    log_level: str = "WARNING"
    source: Path | None = None


def _load_schema_validator() -> Any:
    schema_text = resources.files("sixpair.schemas").joinpath("config.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def default_config_path() -> Path:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "sixpair/config.yaml"


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigLoadError(f"Could not read config file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise ConfigValidationError(f"Invalid YAML in {path}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigValidationError(f"Config file {path} must contain a mapping at root")
    return loaded


def _build_config(doc: dict[str, Any], source: Path) -> SixpairConfig:
    validator = _load_schema_validator()
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise ConfigValidationError(f"Schema validation failed for {source}{where}: {exc.message}") from exc

    device = USBDeviceId.parse(doc["device"]) if "device" in doc else None
    protocol = PairingProtocol(doc["protocol"]) if "protocol" in doc else None
    if device is not None and protocol is None and lookup_known_device(device.vendor, device.product) is None:
        raise ConfigValidationError(
            f"{source}: device {device} is not a known controller, so 'protocol' must be set"
        )

    return SixpairConfig(
        device=device,
        protocol=protocol,
        verify=doc.get("verify", True),
        show_serial=doc.get("show_serial", False),
        log_level=doc.get("log_level", "WARNING"),
        source=source,
    )


def load_config(path: Path | None = None) -> SixpairConfig:
    """Load configuration from ``path``, ``$SIXPAIR_CONFIG`` or the XDG default.

    Only the XDG default may be absent; an explicitly named file must exist.
    """
    explicit = path
    if explicit is None and os.environ.get(CONFIG_ENV_VAR):
        explicit = Path(os.environ[CONFIG_ENV_VAR])

    if explicit is not None:
        if not explicit.is_file():
            raise ConfigLoadError(f"Config file {explicit} does not exist")
        source = explicit
    else:
        source = default_config_path()
        if not source.is_file():
            LOGGER.debug("No config file at %s, using defaults", source)
            return SixpairConfig()

    LOGGER.debug("Loading config from %s", source)
    return _build_config(_read_yaml(source), source)
