"""
Parameter and input resolution for graph execution.

Maps the declarative parameters of a node to runtime values by dereferencing
its input names into the live tensor map, scoped by the execution context.
Nothing here raises for missing data: unknown names, missing params and
out-of-range indexes resolve to None and the executor decides what is fatal.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple
import warnings

import numpy as np
import torch

from .config import DEFAULT_CONFIG, ResolverConfig
from .context import ExecutionContext
from .ir import NamedTensorsMap, Node, Tensor, ValueType


@dataclass
class ParamResolution:
    """Resolved param value and the node input names left after resolving it."""
    value: ValueType
    input_names: List[str]


def _config_of(context: Optional[ExecutionContext]) -> ResolverConfig:
    return getattr(context, 'config', None) or DEFAULT_CONFIG


def _at(items: Optional[Sequence[Any]], index: Optional[int]) -> Any:
    """Bounds-checked read; anything out of range is None."""
    if items is None or index is None or not 0 <= index < len(items):
        return None
    return items[index]


def _flat_data(tensor: Tensor) -> List[Any]:
    """Synchronous read of the tensor contents as a flat list of numbers."""
    if isinstance(tensor, torch.Tensor):
        return tensor.detach().cpu().reshape(-1).tolist()
    return np.asarray(tensor).reshape(-1).tolist()


def resolve_param(param_name: str,
                  node: Node,
                  tensor_map: NamedTensorsMap,
                  context: Optional[ExecutionContext] = None) -> ParamResolution:
    """
    Resolve a node parameter without touching the node.

    Args:
        param_name: Key in ``node.params``
        node: Owning node
        tensor_map: Live tensors keyed by (context-qualified) node name
        context: Execution context; scope qualification is skipped if None

    Returns:
        The value plus the input names the node should have afterwards. Only
        a ``tensors`` param starting past index 0 shortens the list: it
        consumes every name from its index onward.
    """
    input_names = list(node.input_names)
    param = node.params.get(param_name)
    if param is None:
        return ParamResolution(None, input_names)
    if not param.is_input:
        return ParamResolution(param.value, input_names)

    index = param.input_index
    if param.type == 'tensor':
        tensor = _resolve_input(input_names, index, tensor_map, context)
        return ParamResolution(tensor, input_names)

    if param.type == 'tensors':
        if index == 0:
            end = max(len(input_names) - (param.input_param_length or 0), 0)
            names = input_names[:end]
        else:
            names = input_names[index:]
            input_names = input_names[:index]
        tensors = [get_tensor(name, tensor_map, context) for name in names]
        return ParamResolution(tensors, input_names)

    # Negative indexes count from the end, e.g. the trailing axis input of ConcatV2
    if index < 0:
        index = max(len(input_names) + index, 0)
    tensor = _resolve_input(input_names, index, tensor_map, context)
    if tensor is None:
        return ParamResolution(None, input_names)
    data = _flat_data(tensor)
    if param.type == 'number':
        return ParamResolution(_at(data, 0), input_names)
    return ParamResolution(data, input_names)


def get_param_value(param_name: str,
                    node: Node,
                    tensor_map: NamedTensorsMap,
                    context: Optional[ExecutionContext] = None) -> ValueType:
    """
    Resolve a node parameter to its runtime value.

    Same as ``resolve_param`` except that consumed input names are removed
    from ``node.input_names`` in place. That mutation is shared by every
    caller holding the node; use ``resolve_param`` when the node may be
    resolved from more than one context.
    """
    resolution = resolve_param(param_name, node, tensor_map, context)
    if len(resolution.input_names) != len(node.input_names):
        node.input_names[:] = resolution.input_names
    return resolution.value


def _resolve_input(input_names: List[str],
                   index: int,
                   tensor_map: NamedTensorsMap,
                   context: Optional[ExecutionContext]) -> Optional[Tensor]:
    name = _at(input_names, index)
    if name is None:
        if _config_of(context).strict:
            warnings.warn(f"Input index {index} is out of range for inputs {input_names}")
        return None
    return get_tensor(name, tensor_map, context)


def get_tensor(name: str,
               tensor_map: NamedTensorsMap,
               context: Optional[ExecutionContext] = None) -> Optional[Tensor]:
    """
    Retrieve the tensor an input name refers to.

    The context-qualified name is looked up in the tensor map first, so
    tensors computed inside the current frame win. Otherwise the plain name
    is tried against the weights (never scope-qualified) and then against the
    tensor map.

    Args:
        name: Node input name, ``node_name`` or ``node_name:output_index``
        tensor_map: Live tensors keyed by node name
        context: Execution context

    Returns:
        The tensor, or None if it cannot be resolved
    """
    node_name, index = get_node_name_and_index(name, context)
    if node_name in tensor_map:
        tensor = _at(tensor_map[node_name], index)
    else:
        node_name, index = get_node_name_and_index(name)
        weight = context.get_weight(node_name) if context is not None else None
        if weight is not None:
            tensor = _at(weight, index)
        else:
            tensor = _at(tensor_map.get(node_name), index)

    if tensor is None and _config_of(context).strict:
        warnings.warn(f"Input {name} could not be resolved from tensors or weights")
    return tensor


def get_tensors_for_current_context(name: str,
                                    tensor_map: NamedTensorsMap,
                                    context: ExecutionContext) -> Optional[List[Tensor]]:
    """All outputs of ``name`` in the current scope, or None."""
    qualified = get_node_name_with_context_id(
        name, context.current_context_id, _config_of(context).context_separator)
    return tensor_map.get(qualified)


def get_node_name_and_index(input_name: str,
                            context: Optional[ExecutionContext] = None) -> Tuple[str, Optional[int]]:
    """
    Returns the node name and output index of a node input name.

    The input name has the form ``node_name:output_index`` (e.g. ``MatMul:0``);
    a missing index defaults to 0. Only the last ``:`` separates the index.
    An empty index reads as 0 and a non-numeric one gives None.

    Args:
        input_name: Node input name
        context: If it has a current scope id, the node name is qualified with it

    Returns:
        Tuple of (node_name, output_index)
    """
    node_name, sep, suffix = input_name.rpartition(':')
    if not sep:
        node_name, index = input_name, 0
    else:
        index = _parse_index(suffix)

    if context is not None:
        node_name = get_node_name_with_context_id(
            node_name, context.current_context_id, _config_of(context).context_separator)
    return node_name, index


def _parse_index(text: str) -> Optional[int]:
    text = text.strip()
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        return None


def get_node_name_with_context_id(name: str, context_id: Optional[str], separator: str = '-') -> str:
    if context_id:
        return f"{name}{separator}{context_id}"
    return name


def split(values: Sequence[Any], size: int) -> List[List[Any]]:
    """Chunk ``values`` into consecutive groups of ``size``."""
    return [list(values[i:i + size]) for i in range(0, len(values), size)]


def get_padding(node: Node,
                tensor_map: NamedTensorsMap,
                context: Optional[ExecutionContext] = None):
    """
    Resolve the padding of a conv/pool node.

    Returns the ``pad`` param as is ('same', 'valid', ...) unless it is
    'explicit', in which case ``explicitPaddings`` (8 numbers, NHWC order)
    becomes four [before, after] pairs. Missing entries are None.
    """
    pad = get_param_value('pad', node, tensor_map, context)
    if pad != 'explicit':
        return pad
    explicit = get_param_value('explicitPaddings', node, tensor_map, context)
    return [[_at(explicit, i * 2), _at(explicit, i * 2 + 1)] for i in range(4)]
