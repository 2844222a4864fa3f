"""
Export target registry.

Maps target names (``acf``, ``graphql``) and their aliases to generator
classes and builds configured generator instances.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from .core.config import GeneratorConfig, load_config
from .core.generator import CodeGenerator

ConfigSource = Union[GeneratorConfig, Dict[str, Any], str, Path, None]


class RegistryError(Exception):
    """Unknown target, bad generator class or conflicting alias."""

    pass


class GeneratorRegistry:
    """Name and alias lookup for export generators."""

    def __init__(self):
        self._targets: Dict[str, Type[CodeGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        target: str,
        generator_class: Type[CodeGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator under a target name.

        Args:
            target: Primary target name
            generator_class: CodeGenerator subclass
            aliases: Extra names resolving to ``target``
            replace: Overwrite an existing registration instead of keeping it

        Raises:
            RegistryError: If the class is not a CodeGenerator or an alias
                is already taken
        """
        if not (
            isinstance(generator_class, type) and issubclass(generator_class, CodeGenerator)
        ):
            raise RegistryError(
                f"{generator_class!r} is not a CodeGenerator subclass"
            )

        name = target.lower()
        if name in self._targets and not replace:
            return

        alias_names = [a.lower() for a in aliases or [] if a.lower() != name]
        if not replace:
            for alias in alias_names:
                if alias in self._targets:
                    raise RegistryError(f"Alias '{alias}' is already a target name")
                owner = self._aliases.get(alias)
                if owner is not None and owner != name:
                    raise RegistryError(f"Alias '{alias}' already points to '{owner}'")

        self._targets[name] = generator_class
        for alias in alias_names:
            self._aliases[alias] = name

    def unregister(self, target: str):
        name = target.lower()
        self._targets.pop(name, None)
        self._aliases = {
            alias: owner for alias, owner in self._aliases.items() if owner != name
        }

    def resolve(self, target: str) -> str:
        """Return the primary target name for a name or alias."""
        name = target.lower()
        if name in self._targets:
            return name
        if name in self._aliases:
            return self._aliases[name]
        raise RegistryError(
            f"No generator registered for target: {target}. "
            f"Available: {', '.join(self.list_targets())}"
        )

    def is_supported(self, target: str) -> bool:
        name = target.lower()
        return name in self._targets or name in self._aliases

    def create_generator(self, target: str, config: ConfigSource = None) -> CodeGenerator:
        """
        Instantiate the generator for ``target``.

        ``config`` may be a ready GeneratorConfig, a dict of overrides for
        the target defaults, or the path of a JSON config file.

        Raises:
            RegistryError: For unknown targets or unsupported config values
        """
        name = self.resolve(target)

        if config is None:
            config = load_config(name)
        elif isinstance(config, dict):
            config = load_config(name, custom_config=config)
        elif isinstance(config, (str, Path)):
            config = load_config(name, config_file=config)
        elif not isinstance(config, GeneratorConfig):
            raise RegistryError(f"Invalid config type: {type(config).__name__}")

        return self._targets[name](config)

    def list_targets(self) -> List[str]:
        return sorted(self._targets)

    def get_aliases_for_target(self, target: str) -> List[str]:
        name = target.lower()
        return sorted(alias for alias, owner in self._aliases.items() if owner == name)

    def get_target_info(self, target: str) -> Dict[str, Any]:
        """Describe a target: class, module, file extension and aliases."""
        name = self.resolve(target)
        generator = self.create_generator(name)
        return {
            "name": generator.target_name,
            "class": type(generator).__name__,
            "module": type(generator).__module__,
            "file_extension": generator.file_extension,
            "aliases": self.get_aliases_for_target(name),
        }


_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Process-wide registry with the built-in targets."""
    global _registry
    if _registry is None:
        from .languages.acf import ACFGenerator
        from .languages.graphql import GraphQLGenerator

        _registry = GeneratorRegistry()
        _registry.register("acf", ACFGenerator, aliases=["wordpress", "wp"])
        _registry.register("graphql", GraphQLGenerator, aliases=["gql", "sdl"])
    return _registry


def get_generator(target: str, config: ConfigSource = None) -> CodeGenerator:
    return get_registry().create_generator(target, config)


def list_supported_targets() -> List[str]:
    return get_registry().list_targets()


def get_target_info(target: str) -> Dict[str, Any]:
    return get_registry().get_target_info(target)


def list_all_target_info() -> Dict[str, Dict[str, Any]]:
    return {target: get_target_info(target) for target in list_supported_targets()}
