"""Load entity hook configuration from YAML files."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from hookchain.hooks.hook_class import HookClass
from hookchain.hooks.registry import AddonRegistry


@dataclass
class RuleConfig:
    """Static rules of one HookClass, as declared in YAML."""

    required_keys: list[str] = field(default_factory=list)
    default_values: dict[str, Any] = field(default_factory=dict)
    minimum_values: dict[str, Any] = field(default_factory=dict)


@dataclass
class AddonConfig:
    """An addon entry: a registered addon (use) or inline rules."""

    use: str | None = None
    name: str | None = None
    rules: RuleConfig | None = None
    addons: list["AddonConfig"] = field(default_factory=list)


@dataclass
class EntityHookConfig:
    name: str
    rules: RuleConfig = field(default_factory=RuleConfig)
    addons: list[AddonConfig] = field(default_factory=list)
    description: str = ""


class MetadataLoader:
    """Loads entity hook definitions from YAML files.

    Expects one file per entity type under ``<metadata_path>/entities``.
    """

    def __init__(self, metadata_path: Path):
        self.metadata_path = metadata_path
        self.entities: dict[str, EntityHookConfig] = {}

    def load_all(self) -> None:
        """Load all entity definitions."""
        entities_path = self.metadata_path / "entities"
        if not entities_path.exists():
            return

        for yaml_file in sorted(entities_path.glob("*.yaml")):
            with open(yaml_file) as f:
                data = yaml.safe_load(f)
            if data and "entity" in data:
                entity = self._resolve_entity(data)
                if entity.name in self.entities:
                    raise ValueError(
                        f"Entity '{entity.name}' is defined more than once "
                        f"(second definition in {yaml_file.name})"
                    )
                self.entities[entity.name] = entity

    def _resolve_entity(self, data: dict) -> EntityHookConfig:
        return EntityHookConfig(
            name=data["entity"],
            rules=self._resolve_rules(data),
            addons=[self._resolve_addon(a) for a in data.get("addons") or []],
            description=data.get("description", ""),
        )

    def _resolve_rules(self, data: dict) -> RuleConfig:
        return RuleConfig(
            required_keys=list(data.get("requiredKeys") or []),
            default_values=dict(data.get("defaultValues") or {}),
            minimum_values=dict(data.get("minimumValues") or {}),
        )

    def _resolve_addon(self, data: Any) -> AddonConfig:
        """Convert an addon entry (a name or an inline dict) to AddonConfig."""
        if isinstance(data, str):
            return AddonConfig(use=data)
        if isinstance(data, dict):
            use = data.get("use")
            return AddonConfig(
                use=use,
                name=data.get("name"),
                rules=None if use else self._resolve_rules(data),
                addons=[self._resolve_addon(a) for a in data.get("addons") or []],
            )
        raise ValueError(f"Invalid addon entry: {data!r}")

    def get_entity(self, name: str) -> EntityHookConfig | None:
        """Get a resolved entity by name."""
        return self.entities.get(name)

    def list_entities(self) -> list[str]:
        """List all entity names."""
        return list(self.entities.keys())

    def build(self, name: str) -> HookClass:
        """Construct the configured HookClass for an entity type.

        Raises:
            ValueError: If the entity is unknown or references an
                unregistered addon
        """
        entity = self.get_entity(name)
        if entity is None:
            raise ValueError(f"Entity '{name}' is not defined in {self.metadata_path}")

        instance = _hook_class_from_rules(entity.rules, name)
        for addon_config in entity.addons:
            instance.use_addon(self._build_addon(addon_config, name))
        return instance

    def build_all(self) -> dict[str, HookClass]:
        """Construct HookClass instances for every loaded entity type."""
        return {name: self.build(name) for name in self.entities}

    def _build_addon(self, config: AddonConfig, owner: str) -> HookClass:
        if config.use:
            instance = AddonRegistry.create(config.use)
        else:
            instance = _hook_class_from_rules(
                config.rules or RuleConfig(), config.name or f"{owner}.addon"
            )

        for child in config.addons:
            instance.use_addon(self._build_addon(child, owner))
        return instance


def _hook_class_from_rules(rules: RuleConfig, name: str) -> HookClass:
    return HookClass(
        required_keys=rules.required_keys,
        default_values=rules.default_values,
        minimum_values=rules.minimum_values,
        name=name,
    )
