"""Lexical exemptions: ``synchronize`` blocks and ``define_method`` bodies."""

from dataclasses import dataclass, replace

from thread_safety_linter.domain.constants import DEFINE_METHOD, SYNCHRONIZE
from thread_safety_linter.domain.nodes import Node, call_name, is_command


@dataclass(frozen=True)
class ExemptionState:
    inside_synchronized_block: bool = False
    inside_dynamic_method_body: bool = False

    @property
    def exempt(self) -> bool:
        return self.inside_synchronized_block or self.inside_dynamic_method_body

    def entering_block(self, call: Node) -> "ExemptionState":
        """State for the arguments and body of a block attached to ``call``."""
        state = self
        if is_synchronize_call(call):
            state = replace(state, inside_synchronized_block=True)
        if is_define_method_call(call):
            state = replace(state, inside_dynamic_method_body=True)
        return state


NO_EXEMPTION = ExemptionState()


def is_synchronize_call(call: Node) -> bool:
    # Receiver is ignored: SEM.synchronize, @lock.synchronize and a bare
    # synchronize inside MonitorMixin all count.
    return call_name(call) == SYNCHRONIZE


def is_define_method_call(call: Node) -> bool:
    return is_command(call, DEFINE_METHOD)
