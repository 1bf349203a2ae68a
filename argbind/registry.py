"""
Flag and positional registries.

Both registries are small (tens of entries) ordered collections; lookups
are linear scans, and iteration yields specs in declaration order, which is
the order the usage renderer prints them in.
"""
import logging

from .faults import RegistrationError
from .specs import FlagSpec, PositionalSpec

logger = logging.getLogger(__name__)


class FlagRegistry:
    """
    Ordered FlagSpec collection with unique long and short names.

    Lookups
    - bylong(name): exact string match on the long name.
    - byshort(char): exact character match on the short name.
    Both return None when nothing matches.
    """

    def __init__(self):
        self._specs = []

    def declare(self, spec, /):
        if not isinstance(spec, FlagSpec):
            raise TypeError("flag registry accepts only flag specs")
        if spec.long is not None and self.bylong(spec.long) is not None:
            raise RegistrationError(
                "long name '--%s' is already declared" % spec.long,
                hint="pick another long name or drop it and keep only the short one"
            )
        if spec.short is not None and self.byshort(spec.short) is not None:
            raise RegistrationError(
                "short name '-%s' is already declared" % spec.short,
                hint="pick another short name or drop it and keep only the long one"
            )
        self._specs.append(spec)
        logger.debug("declared flag %r", spec)
        return spec

    def bylong(self, name, /):
        for spec in self._specs:
            if spec.long is not None and spec.long == name:
                return spec
        return None

    def byshort(self, char, /):
        for spec in self._specs:
            if spec.short is not None and spec.short == char:
                return spec
        return None

    def clear(self):
        self._specs.clear()

    def __iter__(self):
        return iter(tuple(self._specs))

    def __len__(self):
        return len(self._specs)

    def __bool__(self):
        return bool(self._specs)

    def __repr__(self):
        return f"FlagRegistry({self._specs!r})"


class PositionalRegistry:
    """Ordered PositionalSpec collection; a spec's position is its index."""

    def __init__(self):
        self._specs = []

    def declare(self, destination, /, **metadata):
        spec = PositionalSpec(destination, position=len(self._specs), **metadata)
        self._specs.append(spec)
        logger.debug("declared positional %r", spec)
        return spec

    def get(self, position, /):
        """Return the spec declared at ``position``, or None past the last one."""
        if 0 <= position < len(self._specs):
            return self._specs[position]
        return None

    def clear(self):
        self._specs.clear()

    def __iter__(self):
        return iter(tuple(self._specs))

    def __len__(self):
        return len(self._specs)

    def __bool__(self):
        return bool(self._specs)

    def __repr__(self):
        return f"PositionalRegistry({self._specs!r})"


__all__ = (
    "FlagRegistry",
    "PositionalRegistry",
)
