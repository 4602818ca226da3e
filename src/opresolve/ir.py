"""Graph node and parameter descriptor types."""

from typing import Any, Dict, List, Literal, Optional, Union, get_args
from dataclasses import dataclass, field

import numpy as np
import torch

ParamType = Literal[
    "number", "string", "string[]", "number[]", "bool", "bool[]",
    "shape", "shape[]", "tensor", "tensors", "dtype", "dtype[]", "func",
]
PARAM_TYPES = frozenset(get_args(ParamType))

Tensor = Union[torch.Tensor, np.ndarray]
NamedTensorsMap = Dict[str, List[Tensor]]
ValueType = Any  # literal, tensor, list of tensors, number or list of numbers


@dataclass(frozen=True)
class ParamDescriptor:
    """
    Declarative description of one node parameter.

    When ``input_index`` is set the value comes from the node input at that
    offset; otherwise ``value`` is the literal parameter value.
    """
    type: ParamType
    input_index: Optional[int] = None
    input_param_length: Optional[int] = None  # trailing inputs excluded by 'tensors' at index 0
    value: Any = None

    @property
    def is_input(self) -> bool:
        return self.input_index is not None

    @classmethod
    def literal(cls, value: Any, type: ParamType = "string") -> "ParamDescriptor":
        return cls(type=type, value=value)

    @classmethod
    def tensor(cls, index: int) -> "ParamDescriptor":
        return cls(type="tensor", input_index=index)

    @classmethod
    def tensors(cls, index: int, length: Optional[int] = None) -> "ParamDescriptor":
        return cls(type="tensors", input_index=index, input_param_length=length)

    @classmethod
    def number(cls, index: int) -> "ParamDescriptor":
        return cls(type="number", input_index=index)

    @classmethod
    def numbers(cls, index: int) -> "ParamDescriptor":
        return cls(type="number[]", input_index=index)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParamDescriptor":
        """
        Build a descriptor from its serialized form.

        Args:
            data: Mapping with ``type`` and either ``inputIndex`` (plus an
                optional ``inputParamLength``) or ``value``. snake_case keys
                are accepted too.

        Returns:
            Parameter descriptor
        """
        param_type = data.get("type")
        if param_type not in PARAM_TYPES:
            raise ValueError(f"Unknown param type: {param_type!r}")
        return cls(
            type=param_type,
            input_index=data.get("inputIndex", data.get("input_index")),
            input_param_length=data.get("inputParamLength", data.get("input_param_length")),
            value=data.get("value"),
        )


@dataclass
class Node:
    """
    One operation instance in the graph.

    ``input_names`` entries look like ``node_name`` or ``node_name:output_index``.
    The list is mutable: resolving a variadic ``tensors`` param that starts
    past index 0 consumes its names (see ``resolver.get_param_value``).
    """
    name: str
    op: str
    input_names: List[str] = field(default_factory=list)
    params: Dict[str, ParamDescriptor] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Node":
        params = {
            key: p if isinstance(p, ParamDescriptor) else ParamDescriptor.from_dict(p)
            for key, p in (data.get("params") or {}).items()
        }
        return cls(
            name=data["name"],
            op=data.get("op", ""),
            input_names=list(data.get("inputNames", data.get("input_names", []))),
            params=params,
        )
