"""Method interception.

Replaces a method on a class with a timed wrapper and keeps the original
reachable under a private alias. Supports explicit single-method wrapping
and auto-apply mode, which wraps every method already on the class and
every method defined later.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Iterable

from ...application.services import LogStore, Timer
from ...const import DEFAULT_PREFIX, RESERVED_METHODS
from ...domain.exceptions import NoSuchMethodError, UnwrappableMethodError
from ..decorators import build_timed_wrapper, is_timed_wrapper, original_of
from ..registry import DecorationRegistry
from .timed_meta import TimedMeta, suppress_definition_hook

_LOGGER = logging.getLogger(__name__)


def _is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


class MethodInterceptor:
    """Installs timed wrappers on classes.

    Wrapping is idempotent per (owner, method name): the registry check,
    the registry mark and the attribute writes happen while holding the
    registry lock, and the definition hook is suppressed during the
    writes so alias creation cannot trigger another wrap.
    """

    def __init__(
        self,
        registry: DecorationRegistry,
        timer: Timer,
        store: LogStore,
        is_enabled: Callable[[], bool],
        prefix: str = DEFAULT_PREFIX,
        exclude_methods: Iterable[str] = (),
    ) -> None:
        """Initialize interceptor.

        Args:
            registry: Registry of wrapped methods and attached types
            timer: Timer used by every wrapper
            store: Store owning per-instance logs
            is_enabled: Returns False while timing is switched off
            prefix: Alias prefix; the alias of ``name`` is ``_<prefix><name>``
            exclude_methods: Names auto-apply mode never wraps
        """
        self._registry = registry
        self._timer = timer
        self._store = store
        self._is_enabled = is_enabled
        self._prefix = prefix
        self._exclude_methods = frozenset(exclude_methods)

    def alias_name(self, method_name: str) -> str:
        """Private attribute name holding the original of ``method_name``."""
        return f"_{self._prefix}{method_name}"

    def is_alias(self, owner: type, name: str) -> bool:
        """Check whether ``name`` is an alias installed on ``owner`` or a base."""
        marker = f"_{self._prefix}"
        if not name.startswith(marker):
            return False
        method_name = name[len(marker):]
        return any(
            method_name in self._registry.decorated_names(klass)
            for klass in owner.__mro__
        )

    def wrap(self, owner: type, method_name: str) -> bool:
        """Wrap ``owner.method_name`` with a timed wrapper.

        Args:
            owner: Class to instrument
            method_name: Method to instrument (may be inherited)

        Returns:
            True if a wrapper was installed, False if already timed

        Raises:
            NoSuchMethodError: Name missing or not callable
            UnwrappableMethodError: Reserved name or non-instance method
        """
        with self._registry.lock:
            raw, defined_on_owner = self._resolve(owner, method_name)

            if is_timed_wrapper(raw):
                if defined_on_owner:
                    self._registry.mark_decorated(owner, method_name)
                _LOGGER.debug(
                    "%s.%s already timed, skipping",
                    owner.__qualname__,
                    method_name,
                )
                return False

            alias = self.alias_name(method_name)
            if alias in owner.__dict__ and not self._registry.is_decorated(
                owner, method_name
            ):
                raise UnwrappableMethodError(
                    owner, method_name, f"{alias} is already defined on the class"
                )

            if not self._registry.check_and_mark(owner, method_name):
                # Marked earlier but the wrapper has since been replaced
                _LOGGER.debug(
                    "%s.%s was redefined, wrapping again",
                    owner.__qualname__,
                    method_name,
                )

            try:
                self._install(owner, method_name, raw, defined_on_owner)
            except BaseException:
                self._registry.forget(owner, method_name)
                raise
            return True

    def unwrap(self, owner: type, method_name: str) -> None:
        """Restore the original implementation of ``owner.method_name``.

        Raises:
            NoSuchMethodError: Method is not wrapped on ``owner`` itself
        """
        with self._registry.lock:
            current = owner.__dict__.get(method_name)
            original = original_of(current)
            if original is None:
                raise NoSuchMethodError(owner, method_name, "not timed on this class")

            alias = self.alias_name(method_name)
            with suppress_definition_hook():
                if alias in owner.__dict__:
                    delattr(owner, alias)
                if current.__timed_defined_on_owner__:
                    setattr(owner, method_name, original)
                else:
                    delattr(owner, method_name)
            self._registry.forget(owner, method_name)

        _LOGGER.debug("Unwrapped %s.%s", owner.__qualname__, method_name)

    def is_wrapped(self, owner: type, method_name: str) -> bool:
        """Check whether calls to ``owner().method_name`` are timed."""
        return is_timed_wrapper(inspect.getattr_static(owner, method_name, None))

    def attach(self, owner: type) -> list[str]:
        """Enable auto-apply mode on ``owner``.

        Wraps every qualifying method ``owner`` defines or inherits from
        a base that is not timed already. Methods defined later are
        wrapped by the TimedMeta hook; for plain classes only new
        subclasses are picked up automatically, and calling ``attach``
        again wraps anything added since.

        Returns:
            Names wrapped by this call
        """
        with self._registry.lock:
            newly_attached = self._registry.attach(owner)
            wrapped = [
                name
                for name, value in self._visible_methods(owner)
                if self.is_eligible(name, value) and self.wrap(owner, name)
            ]
            if (
                newly_attached
                and not isinstance(owner, TimedMeta)
                and self._registry.attached_ancestor(owner) is None
            ):
                self._install_subclass_hook(owner)

        if wrapped:
            _LOGGER.debug(
                "Auto-applied timing to %s: %s",
                owner.__qualname__,
                ", ".join(wrapped),
            )
        return wrapped

    def is_attached(self, owner: type) -> bool:
        """Check whether ``owner`` is in auto-apply mode."""
        return self._registry.is_attached(owner)

    def on_method_defined(self, owner: type, method_name: str) -> None:
        """Definition hook: wrap a method assigned to an attached class."""
        if not self._registry.is_attached(owner):
            return
        if not self.is_eligible(method_name, owner.__dict__.get(method_name)):
            return
        if self.wrap(owner, method_name):
            _LOGGER.debug(
                "Wrapped %s.%s on definition", owner.__qualname__, method_name
            )

    def is_eligible(self, name: str, value: Any) -> bool:
        """Check whether auto-apply mode should wrap ``name``.

        Only public plain or async functions qualify.
        """
        if name.startswith("_"):
            return False
        if name in self._exclude_methods or name in RESERVED_METHODS:
            return False
        if is_timed_wrapper(value):
            return False
        return inspect.isfunction(value)

    @staticmethod
    def _visible_methods(owner: type) -> list[tuple[str, Any]]:
        """(name, raw attribute) pairs instances of ``owner`` resolve to.

        Walks the MRO without ``object``; a name shadowed by an earlier
        class is reported once, with the attribute that wins.
        """
        seen: set[str] = set()
        visible = []
        for klass in owner.__mro__[:-1]:
            for name, value in list(vars(klass).items()):
                if name not in seen:
                    seen.add(name)
                    visible.append((name, value))
        return visible

    def _resolve(self, owner: type, method_name: str) -> tuple[Any, bool]:
        """Find the raw attribute to wrap, validating it.

        Returns:
            (raw attribute, whether it lives in ``owner.__dict__``)
        """
        if _is_dunder(method_name):
            raise UnwrappableMethodError(
                owner, method_name, "reserved protocol method"
            )
        if self.is_alias(owner, method_name):
            raise UnwrappableMethodError(
                owner, method_name, "internal alias of a timed method"
            )
        if method_name in RESERVED_METHODS:
            raise UnwrappableMethodError(
                owner, method_name, "timing bookkeeping method"
            )
        if method_name in self._exclude_methods:
            raise UnwrappableMethodError(
                owner, method_name, "excluded by configuration"
            )

        for klass in owner.__mro__:
            if method_name in klass.__dict__:
                raw = klass.__dict__[method_name]
                break
        else:
            raise NoSuchMethodError(owner, method_name)

        if isinstance(raw, (staticmethod, classmethod)):
            raise UnwrappableMethodError(
                owner, method_name, f"{type(raw).__name__} is not an instance method"
            )
        if isinstance(raw, property):
            raise UnwrappableMethodError(owner, method_name, "property")
        if not callable(raw):
            raise NoSuchMethodError(owner, method_name, "attribute is not callable")
        if not hasattr(raw, "__get__") or isinstance(raw, type):
            raise UnwrappableMethodError(
                owner, method_name, "callable attribute does not bind as a method"
            )

        return raw, klass is owner

    def _install(
        self, owner: type, method_name: str, raw: Any, defined_on_owner: bool
    ) -> None:
        wrapper = build_timed_wrapper(
            raw,
            method_name,
            self._timer,
            self._store,
            self._is_enabled,
            defined_on_owner=defined_on_owner,
        )
        try:
            with suppress_definition_hook():
                setattr(owner, self.alias_name(method_name), raw)
                setattr(owner, method_name, wrapper)
        except TypeError as err:
            raise UnwrappableMethodError(
                owner, method_name, f"type does not accept new attributes ({err})"
            ) from err

        _LOGGER.debug(
            "Wrapped %s.%s (original kept as %s)",
            owner.__qualname__,
            method_name,
            self.alias_name(method_name),
        )

    def _install_subclass_hook(self, owner: type) -> None:
        """Attach every future subclass of a plain class."""
        previous = owner.__dict__.get("__init_subclass__")
        interceptor = self

        def __init_subclass__(cls, **kwargs):
            if previous is not None:
                previous.__get__(None, cls)(**kwargs)
            else:
                super(owner, cls).__init_subclass__(**kwargs)
            interceptor.attach(cls)

        with suppress_definition_hook():
            owner.__init_subclass__ = classmethod(__init_subclass__)
