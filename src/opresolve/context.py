"""Execution context: weight lookup and control-flow scope ids."""

from dataclasses import dataclass, replace
from typing import List, Optional

from .config import ResolverConfig
from .ir import NamedTensorsMap, Tensor


@dataclass(frozen=True)
class FrameInfo:
    """One level of the control-flow frame stack."""
    id: int
    frame_name: str
    iteration_id: int = 0


class ExecutionContext:
    """
    Tracks the frame stack of a graph execution and exposes model weights.

    Every (frame, iteration) combination gets its own scope id, so the same
    node executed inside a loop body writes distinct tensor map entries per
    iteration. The root scope id is the empty string, which means names
    outside any frame are never qualified.
    """

    def __init__(self,
                 weight_map: Optional[NamedTensorsMap] = None,
                 config: Optional[ResolverConfig] = None):
        """
        Initialize the context.

        Args:
            weight_map: Constant tensors of the model keyed by node name
            config: Resolver configuration, read from the environment if omitted
        """
        self.weight_map: NamedTensorsMap = weight_map if weight_map is not None else {}
        self.config = config or ResolverConfig.from_env()
        self._root = FrameInfo(id=0, frame_name='', iteration_id=0)
        self._contexts: List[FrameInfo] = [self._root]
        self._last_id = 0
        self._current_context_ids: List[str] = []
        self._generate_current_context_ids()

    @property
    def current_context(self) -> List[FrameInfo]:
        return self._contexts

    @current_context.setter
    def current_context(self, contexts: List[FrameInfo]):
        if self._contexts is not contexts:
            self._contexts = contexts
            self._generate_current_context_ids()

    @property
    def current_context_id(self) -> str:
        """Scope id of the innermost frame."""
        return self._current_context_ids[0]

    @property
    def current_context_ids(self) -> List[str]:
        """Scope ids from the innermost frame out to the root."""
        return self._current_context_ids

    def _generate_current_context_ids(self):
        ids = []
        for depth in range(len(self._contexts), 1, -1):
            ids.append(self._context_id_for(self._contexts[:depth]))
        ids.append('')
        self._current_context_ids = ids

    @staticmethod
    def _context_id_for(contexts: List[FrameInfo]) -> str:
        return '/'.join(
            '' if (frame.id == 0 and frame.iteration_id == 0)
            else f"{frame.frame_name}-{frame.iteration_id}"
            for frame in contexts
        )

    def enter_frame(self, frame_name: str):
        """Push a new frame (iteration 0) for a control-flow scope."""
        self._last_id += 1
        self._contexts = self._contexts + [FrameInfo(id=self._last_id, frame_name=frame_name)]
        self._current_context_ids.insert(0, self._context_id_for(self._contexts))

    def exit_frame(self):
        """Pop the innermost frame."""
        if len(self._contexts) <= 1:
            raise RuntimeError("Cannot exit frame, the context is empty")
        self._contexts = self._contexts[:-1]
        self._current_context_ids.pop(0)

    def next_iteration(self):
        """Advance the innermost frame to its next iteration."""
        if not self._contexts:
            raise RuntimeError("Cannot increase frame iteration, the context is empty")
        self._last_id += 1
        frame = self._contexts[-1]
        frame = replace(frame, id=self._last_id, iteration_id=frame.iteration_id + 1)
        self._contexts = self._contexts[:-1] + [frame]
        self._current_context_ids[0] = self._context_id_for(self._contexts)

    def get_weight(self, name: str) -> Optional[List[Tensor]]:
        """Weights are stored under unqualified node names."""
        return self.weight_map.get(name)
