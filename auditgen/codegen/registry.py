"""
Target registry.

Maps target names and their aliases to generator classes and builds
configured generator instances for them.
"""

from typing import Dict, Type, Optional, Any, List, Union
from pathlib import Path

from .core.generator import ConfigGenerator
from .core.config import GeneratorConfig, load_config

ConfigSource = Union[GeneratorConfig, Dict[str, Any], str, Path, None]


class RegistryError(Exception):
    """Raised for unknown targets and invalid registrations."""

    pass


class GeneratorRegistry:
    """Known generation targets."""

    def __init__(self):
        self._targets: Dict[str, Type[ConfigGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        target: str,
        generator_class: Type[ConfigGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator class under a target name.

        Args:
            target: Primary target name (e.g., 'csharp')
            generator_class: ConfigGenerator subclass rendering the target
            aliases: Additional names resolving to the target
            replace: Overwrite an existing registration instead of keeping it

        Raises:
            RegistryError: If the class is not a generator or an alias is taken
        """
        if not (
            isinstance(generator_class, type)
            and issubclass(generator_class, ConfigGenerator)
        ):
            raise RegistryError(
                f"{generator_class!r} is not a ConfigGenerator subclass"
            )

        key = target.lower()
        if key in self._targets and not replace:
            return
        self._targets[key] = generator_class

        for alias in aliases or []:
            alias_key = alias.lower()
            if alias_key == key:
                continue

            owner = self._aliases.get(alias_key)
            if not replace:
                if alias_key in self._targets:
                    raise RegistryError(f"Alias '{alias}' is already a target name")
                if owner is not None and owner != key:
                    raise RegistryError(f"Alias '{alias}' already points to '{owner}'")

            self._aliases[alias_key] = key

    def unregister(self, target: str):
        """Remove a target together with its aliases."""
        key = target.lower()
        self._targets.pop(key, None)
        self._aliases = {
            alias: owner for alias, owner in self._aliases.items() if owner != key
        }

    def resolve_name(self, name: str) -> str:
        """
        Resolve a target name or alias to the primary target name.

        Raises:
            RegistryError: If nothing is registered under the name
        """
        key = name.lower()
        if key in self._targets:
            return key
        if key in self._aliases:
            return self._aliases[key]

        raise RegistryError(
            f"Unknown target: {name}. Available: {', '.join(self.list_targets())}"
        )

    def get_generator_class(self, name: str) -> Type[ConfigGenerator]:
        return self._targets[self.resolve_name(name)]

    def create_generator(self, name: str, config: ConfigSource = None) -> ConfigGenerator:
        """
        Instantiate the generator of a target.

        Args:
            name: Target name or alias
            config: GeneratorConfig, override dict, JSON config path or None
                for the target defaults

        Returns:
            Configured generator

        Raises:
            RegistryError: For unknown targets or unusable configuration
        """
        target = self.resolve_name(name)
        generator_class = self._targets[target]

        if isinstance(config, GeneratorConfig):
            resolved = config
        elif isinstance(config, dict):
            resolved = load_config(target, custom_config=config)
        elif isinstance(config, (str, Path)):
            resolved = load_config(target, config_file=config)
        elif config is None:
            resolved = load_config(target)
        else:
            raise RegistryError(f"Invalid config type: {type(config).__name__}")

        try:
            return generator_class(resolved)
        except Exception as e:
            raise RegistryError(f"Failed to create {target} generator: {e}") from e

    def list_targets(self) -> List[str]:
        """Primary target names, sorted."""
        return sorted(self._targets)

    def aliases_for(self, target: str) -> List[str]:
        key = target.lower()
        return sorted(alias for alias, owner in self._aliases.items() if owner == key)

    def is_supported(self, name: str) -> bool:
        key = name.lower()
        return key in self._targets or key in self._aliases

    def target_info(self, name: str) -> Dict[str, Any]:
        """
        Describe a target for listings.

        Returns:
            Dict with name, class, file_extension, aliases, module and templates
        """
        target = self.resolve_name(name)
        generator = self.create_generator(target)

        return {
            "name": generator.target_name,
            "class": type(generator).__name__,
            "file_extension": generator.file_extension,
            "aliases": self.aliases_for(target),
            "module": type(generator).__module__,
            "templates": str(generator.get_template_directory()),
        }


_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Return the process-wide registry with the bundled targets."""
    global _registry
    if _registry is None:
        _registry = GeneratorRegistry()
        _register_bundled_targets(_registry)
    return _registry


def _register_bundled_targets(registry: GeneratorRegistry):
    from .languages.csharp import CSharpGenerator

    registry.register("csharp", CSharpGenerator, aliases=["cs", "efcore"])


# Shortcuts over the process-wide registry


def register_generator(
    target: str,
    generator_class: Type[ConfigGenerator],
    aliases: Optional[List[str]] = None,
):
    get_registry().register(target, generator_class, aliases)


def get_generator(target: str = "csharp", config: ConfigSource = None) -> ConfigGenerator:
    """Create a configured generator for a target name or alias."""
    return get_registry().create_generator(target, config)


def list_targets() -> List[str]:
    return get_registry().list_targets()


def is_target_supported(name: str) -> bool:
    return get_registry().is_supported(name)


def get_target_info(name: str) -> Dict[str, Any]:
    return get_registry().target_info(name)
