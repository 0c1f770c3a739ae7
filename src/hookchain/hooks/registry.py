"""Addon registry for hookchain.

Provides registration and lookup for named addons so that entity metadata
can reference them by name.
"""

from collections.abc import Callable

from hookchain.hooks.hook_class import HookClass

# Addon factory signature: () -> HookClass. Classes qualify directly.
AddonFactory = Callable[[], HookClass]


class AddonRegistry:
    """Registry for named addon factories.

    Addons must be explicitly registered before they can be referenced
    from entity metadata. Registration is typically done at application
    startup via register_builtin_addons() or the @addon decorator.

    Example:
        @addon("softDelete")
        class SoftDeleteAddon(HookClass):
            ...
    """

    _factories: dict[str, AddonFactory] = {}

    @classmethod
    def register(cls, name: str, factory: AddonFactory) -> None:
        """Register an addon factory by name.

        Idempotent: re-registering the same name is a no-op.

        Args:
            name: Unique identifier for the addon
            factory: Callable returning a new HookClass instance
        """
        if name in cls._factories:
            return
        cls._factories[name] = factory

    @classmethod
    def get(cls, name: str) -> AddonFactory:
        """Get a registered addon factory by name.

        Raises:
            ValueError: If addon is not registered
        """
        if name not in cls._factories:
            raise ValueError(
                f"Addon '{name}' is not registered. "
                "Addons must be explicitly registered at application startup."
            )
        return cls._factories[name]

    @classmethod
    def create(cls, name: str) -> HookClass:
        """Build a fresh addon instance from its registered factory."""
        instance = cls.get(name)()
        if not isinstance(instance, HookClass):
            raise ValueError(
                f"Addon '{name}' factory returned {type(instance).__name__}, "
                "expected a HookClass"
            )
        return instance

    @classmethod
    def is_registered(cls, name: str) -> bool:
        """Check if an addon is registered."""
        return name in cls._factories

    @classmethod
    def list_registered(cls) -> list[str]:
        """List all registered addon names."""
        return sorted(cls._factories.keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations. Primarily for testing."""
        cls._factories.clear()


def addon(name: str) -> Callable[[AddonFactory], AddonFactory]:
    """Decorator to register an addon class or factory.

    Usage:
        @addon("softDelete")
        class SoftDeleteAddon(HookClass):
            ...
    """

    def decorator(factory: AddonFactory) -> AddonFactory:
        AddonRegistry.register(name, factory)
        return factory

    return decorator
