"""Lexical scope table threaded through a file's traversal."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional


@dataclass(frozen=True)
class TranslatorBinding:
    """How a translator variable was obtained.

    ``scope`` is one of ``bound`` (namespace literal known), ``root`` (hook
    called without a namespace) or ``unknown`` (namespace computed at runtime).
    """

    scope: str
    namespace: Optional[str] = None


@dataclass(frozen=True)
class Binding:
    value: Optional[str] = None
    translated: bool = False
    translator: Optional[TranslatorBinding] = None


class ScopeTable:
    """Stack of frames mapping names to their most recent binding.

    Best effort and shallow: only the latest literal initializer is kept and
    no control flow is considered.
    """

    def __init__(self) -> None:
        self._frames: List[Dict[str, Binding]] = [{}]

    def push(self) -> None:
        self._frames.append({})

    def pop(self) -> None:
        if len(self._frames) == 1:
            raise RuntimeError("cannot pop the file scope")
        self._frames.pop()

    def bind(self, name: str, binding: Binding) -> None:
        self._frames[-1][name] = binding

    def assign(self, name: str, binding: Binding) -> None:
        """Rebind ``name`` in the frame that declared it (the file scope if none did)."""

        for frame in reversed(self._frames):
            if name in frame:
                frame[name] = binding
                return
        self._frames[0][name] = binding

    def lookup(self, name: str) -> Optional[Binding]:
        for frame in reversed(self._frames):
            if name in frame:
                return frame[name]
        return None

    def literal(self, name: str) -> Optional[str]:
        """Resolver callback for :func:`i18nscan.matchers.resolve_static_string`."""

        binding = self.lookup(name)
        return binding.value if binding is not None else None

    def is_translated(self, name: str) -> bool:
        binding = self.lookup(name)
        return binding is not None and binding.translated

    def translator(self, name: str) -> Optional[TranslatorBinding]:
        binding = self.lookup(name)
        return binding.translator if binding is not None else None

    def translators(self) -> Iterator[TranslatorBinding]:
        """Visible translator bindings, innermost first."""

        seen = set()
        for frame in reversed(self._frames):
            for name, binding in frame.items():
                if name in seen:
                    continue
                seen.add(name)
                if binding.translator is not None:
                    yield binding.translator
