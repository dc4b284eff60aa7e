"""Lexical scope tracking.

The walker never keeps a shared scope registry. Each descent step builds a new
``ScopeStack`` value and the caller's stack is untouched when the child walk
returns, so leaving a scope is just dropping the value.
"""

from dataclasses import dataclass, field, replace
from enum import Enum


class ScopeKind(Enum):
    ROOT = "root"
    MODULE_BODY = "module"
    CLASS_BODY = "class"
    SINGLETON_CLASS_BODY = "sclass"
    CLASS_METHODS_BLOCK = "class_methods"
    METHOD_DEF = "def"
    DYNAMIC_METHOD_BODY = "dynamic_method"

    @property
    def is_method_like(self) -> bool:
        return self in (ScopeKind.METHOD_DEF, ScopeKind.DYNAMIC_METHOD_BODY)


@dataclass(frozen=True)
class ModuleFunctionMode:
    """
    State of ``module_function`` directives seen in one scope body.

    ``all_subsequent`` is set once a bare ``module_function`` statement has been
    walked; ``names`` holds every name passed explicitly anywhere in the body.
    """

    all_subsequent: bool = False
    names: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_empty(self) -> bool:
        return not self.all_subsequent and not self.names

    def covers(self, method_name: str | None) -> bool:
        """True when a sibling definition with this name is a module function."""
        if self.all_subsequent:
            return True
        return method_name is not None and method_name in self.names


NO_MODULE_FUNCTION = ModuleFunctionMode()


@dataclass(frozen=True)
class ScopeFrame:
    kind: ScopeKind
    declared_name: str | None = None
    module_function_mode: ModuleFunctionMode = NO_MODULE_FUNCTION
    class_method: bool = False


ROOT_FRAME = ScopeFrame(kind=ScopeKind.ROOT)


@dataclass(frozen=True)
class ScopeStack:
    """Immutable, never-empty stack of scope frames (innermost last)."""

    frames: tuple[ScopeFrame, ...] = (ROOT_FRAME,)

    @property
    def top(self) -> ScopeFrame:
        return self.frames[-1]

    @property
    def depth(self) -> int:
        return len(self.frames)

    def enter(
        self,
        kind: ScopeKind,
        declared_name: str | None = None,
        class_method: bool = False,
    ) -> "ScopeStack":
        """Push a frame. New frames never inherit directive state."""
        frame = ScopeFrame(kind=kind, declared_name=declared_name, class_method=class_method)
        return ScopeStack(self.frames + (frame,))

    def exit(self) -> "ScopeStack":
        """Pop the innermost frame. The root frame is never popped."""
        if len(self.frames) == 1:
            return self
        return ScopeStack(self.frames[:-1])

    def with_module_function_mode(self, mode: ModuleFunctionMode) -> "ScopeStack":
        """Replace the top frame's directive state (the only allowed frame update)."""
        if mode == self.top.module_function_mode:
            return self
        return ScopeStack(self.frames[:-1] + (replace(self.top, module_function_mode=mode),))

    def innermost_non_method(self) -> ScopeFrame:
        """Nearest frame that is not a method body; Root at worst."""
        for frame in reversed(self.frames):
            if not frame.kind.is_method_like:
                return frame
        return self.frames[0]

    def innermost_method(self) -> ScopeFrame | None:
        """Nearest def or dynamic method body, if the position is inside one."""
        for frame in reversed(self.frames):
            if frame.kind.is_method_like:
                return frame
        return None


EMPTY_STACK = ScopeStack()
